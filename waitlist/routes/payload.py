# waitlist/routes/payload.py
from __future__ import annotations

from typing import Any, Dict

from flask import request


def request_fields() -> Dict[str, Any]:
    """Submitted fields, from a JSON body or from a classic form post."""
    data = request.get_json(silent=True)
    if isinstance(data, dict):
        return data
    return request.form.to_dict()
