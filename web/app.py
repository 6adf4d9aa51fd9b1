#!/usr/bin/env python
"""Static site, uploaded photos and the small JSON API behind them."""

import json
import logging
import os
from pathlib import Path

from flask import Flask, Response, jsonify, request, send_from_directory
from flask_cors import CORS

from core.events import EventBus, event_bus as default_event_bus
from modules import uploads
from modules.contact import MSG_SEND_FAILED, ContactSubmission, validate_submission
from modules.mailer import EmailJSSender, MailerError

logger = logging.getLogger("studio")

PROJECT_ROOT = Path(__file__).resolve().parent.parent
SITE_DIR = Path(os.getenv("SITE_DIR", str(PROJECT_ROOT / "public")))
UPLOAD_FIELD = "photo"
DEFAULT_INDEX = "index.html"


def create_app(site_dir=None, upload_dir=None, *, sender=None, event_bus: EventBus = None) -> Flask:
    app = Flask(__name__, static_folder=None)
    CORS(app, supports_credentials=True)

    site_root = Path(site_dir or SITE_DIR).resolve()
    upload_root = Path(upload_dir or uploads.UPLOAD_DIR).resolve()
    upload_root.mkdir(parents=True, exist_ok=True)
    bus = event_bus or default_event_bus
    mail_sender = sender or EmailJSSender()

    app.config.update(SITE_DIR=site_root, UPLOAD_DIR=upload_root)

    @app.route('/upload', methods=['POST'])
    def upload_photo():
        photo = request.files.get(UPLOAD_FIELD)
        if photo is None or not photo.filename:
            logger.info({"evt": "upload_rejected", "reason": "missing_field"})
            return Response("No file uploaded.", status=400, mimetype="text/plain")
        target = uploads.save_upload(photo, upload_root)
        bus.publish("photo_uploaded", {"filename": target.name})
        return Response("Photo uploaded successfully!", mimetype="text/plain")

    def list_uploads():
        try:
            images = uploads.list_images(upload_root)
        except OSError as exc:
            logger.error({"evt": "upload_list_error", "dir": str(upload_root), "error": str(exc)})
            return jsonify({"error": "Cannot list files"}), 500
        return jsonify(images)

    # `/uploads` predates the API prefix; the exact rule outranks both static mounts.
    app.add_url_rule('/api/uploads', 'api_list_uploads', list_uploads, methods=['GET'])
    app.add_url_rule('/uploads', 'list_uploads', list_uploads, methods=['GET'])

    @app.route('/uploads/<path:filename>')
    def uploaded_file(filename):
        return send_from_directory(upload_root, filename)

    @app.route('/api/contact', methods=['POST'])
    def contact():
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            data = request.form.to_dict()
        submission = ContactSubmission.from_mapping(data)
        error = validate_submission(submission)
        if error is not None:
            return jsonify({"error": error}), 400
        try:
            mail_sender.send(submission.as_params())
        except MailerError as exc:
            logger.error({"evt": "contact_send_failed", "error": str(exc)})
            return jsonify({"error": MSG_SEND_FAILED}), 502
        return jsonify({"success": True})

    @app.route('/api/events')
    def sse_events():
        """Server-sent events stream of upload notifications."""
        def stream():
            queue = bus.listen()
            try:
                while True:
                    message = queue.get()
                    event_type = message.get("type", "message")
                    payload = message.get("payload", {})
                    yield f"event: {event_type}\ndata: {json.dumps(payload)}\n\n"
            finally:
                bus.remove(queue)

        return Response(stream(), mimetype='text/event-stream')

    @app.route('/api/health')
    def health():
        return jsonify({"status": "ok", "site_dir": str(site_root), "upload_dir": str(upload_root)})

    @app.route('/')
    def index():
        return send_from_directory(site_root, DEFAULT_INDEX)

    @app.route('/<path:filename>')
    def site_file(filename):
        return send_from_directory(site_root, filename)

    return app


__all__ = ["create_app", "SITE_DIR", "UPLOAD_FIELD"]
