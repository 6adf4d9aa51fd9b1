import io
import re
import shutil
import threading
import time

from modules import uploads
from modules.contact import MSG_INVALID_EMAIL, MSG_MISSING_FIELDS, MSG_SEND_FAILED
from modules.mailer import MailerError


def test_serves_site_files(client):
    assert client.get("/").data == b"<h1>home</h1>"
    assert client.get("/style.css").status_code == 200
    assert client.get("/missing.html").status_code == 404


def test_upload_without_file_is_rejected(client, upload_dir):
    resp = client.post("/upload", data={"note": "no photo"})
    assert resp.status_code == 400
    assert resp.data == b"No file uploaded."
    assert list(upload_dir.iterdir()) == []


def test_upload_with_wrong_field_is_rejected(client):
    data = {"file": (io.BytesIO(b"x"), "cat.png")}
    resp = client.post("/upload", data=data, content_type="multipart/form-data")
    assert resp.status_code == 400


def test_upload_saves_timestamped_file(client, upload_dir, bus):
    listener = bus.listen()
    data = {"photo": (io.BytesIO(b"\x89PNG data"), "holiday.png")}
    resp = client.post("/upload", data=data, content_type="multipart/form-data")
    assert resp.status_code == 200
    assert resp.data == b"Photo uploaded successfully!"

    stored = list(upload_dir.iterdir())
    assert len(stored) == 1
    assert re.fullmatch(r"\d{13}\.png", stored[0].name)
    assert stored[0].read_bytes() == b"\x89PNG data"
    assert listener.get_nowait()["payload"] == {"filename": stored[0].name}

    # The new file is immediately servable.
    assert client.get(f"/uploads/{stored[0].name}").data == b"\x89PNG data"


def test_upload_accepts_any_file_type(client, upload_dir, monkeypatch):
    monkeypatch.setattr(uploads, "timestamp_ms", lambda: 1234)
    data = {"photo": (io.BytesIO(b"text"), "notes.txt")}
    assert client.post("/upload", data=data, content_type="multipart/form-data").status_code == 200
    assert (upload_dir / "1234.txt").exists()


def test_listing_returns_only_images(client, upload_dir):
    for name in ("c.JPG", "b.txt", "a.png"):
        (upload_dir / name).write_bytes(b"")
    for path in ("/uploads", "/api/uploads"):
        resp = client.get(path)
        assert resp.status_code == 200
        assert resp.get_json() == ["a.png", "c.JPG"]


def test_listing_failure_is_500(client, upload_dir):
    shutil.rmtree(upload_dir)
    resp = client.get("/api/uploads")
    assert resp.status_code == 500
    assert resp.get_json() == {"error": "Cannot list files"}


def test_missing_upload_is_404(client):
    assert client.get("/uploads/nope.png").status_code == 404


def test_contact_relay_sends(client, sender):
    resp = client.post("/api/contact", json={"name": " Ada ", "email": "ada@example.com", "message": "Hi"})
    assert resp.status_code == 200
    assert resp.get_json() == {"success": True}
    assert sender.sent == [{"name": "Ada", "email": "ada@example.com", "message": "Hi"}]


def test_contact_relay_accepts_form_fields(client, sender):
    resp = client.post("/api/contact", data={"name": "Ada", "email": "ada@example.com", "message": "Hi"})
    assert resp.status_code == 200
    assert len(sender.sent) == 1


def test_contact_relay_validates(client, sender):
    resp = client.post("/api/contact", json={"name": "Ada", "email": "", "message": "Hi"})
    assert resp.status_code == 400
    assert resp.get_json() == {"error": MSG_MISSING_FIELDS}

    resp = client.post("/api/contact", json={"name": "Ada", "email": "ada@b", "message": "Hi"})
    assert resp.get_json() == {"error": MSG_INVALID_EMAIL}
    assert sender.sent == []


def test_contact_relay_hides_delivery_errors(client, sender):
    sender.error = MailerError("EmailJS returned 403: private key leaked")
    resp = client.post("/api/contact", json={"name": "Ada", "email": "ada@example.com", "message": "Hi"})
    assert resp.status_code == 502
    assert resp.get_json() == {"error": MSG_SEND_FAILED}


def test_health(client, upload_dir):
    data = client.get("/api/health").get_json()
    assert data["status"] == "ok"
    assert data["upload_dir"] == str(upload_dir.resolve())


def test_event_stream_delivers_upload_notice(client, bus):
    def announce():
        deadline = time.monotonic() + 5
        while bus.listener_count == 0 and time.monotonic() < deadline:
            time.sleep(0.01)
        bus.publish("photo_uploaded", {"filename": "1700000000000.png"})

    publisher = threading.Thread(target=announce, daemon=True)
    publisher.start()
    resp = client.get("/api/events", buffered=False)
    assert resp.status_code == 200
    assert resp.mimetype == "text/event-stream"

    chunk = next(iter(resp.response))
    publisher.join(timeout=5)
    if isinstance(chunk, bytes):
        chunk = chunk.decode("utf-8")
    assert chunk == 'event: photo_uploaded\ndata: {"filename": "1700000000000.png"}\n\n'

    resp.close()
    assert bus.listener_count == 0
