# =============================================================================
# File: run.py
# Purpose: Entry point. Starts the waitlist / contact-share Flask app.
# =============================================================================
# run.py
import logging

from waitlist import create_app

log = logging.getLogger("waitlist.run")

app = create_app()

if __name__ == "__main__":
    port = app.config["PORT"]
    log.info("illumibot waitlist server running on port %s", port)
    log.info("Waitlist: http://localhost:%s/", port)
    log.info("Contact:  http://localhost:%s/contact", port)
    log.info("QR Codes: http://localhost:%s/qr", port)
    try:
        app.run(host="0.0.0.0", port=port, threaded=True)
    finally:
        app.extensions["waitlist.mirror"].close()
