import run
from shiftwage.core.config import ServerConfig


def test_server_starts_from_import_string(monkeypatch):
    calls = []
    monkeypatch.setattr(run.uvicorn, "run", lambda app, **kwargs: calls.append((app, kwargs)))
    monkeypatch.setattr(ServerConfig, "WORKERS", 4)
    monkeypatch.setattr(ServerConfig, "SSL_CERT_FILE", "")

    run.main()

    app, kwargs = calls[0]
    assert app == "shiftwage.main:app"
    assert kwargs["workers"] == 4
    assert "ssl_certfile" not in kwargs


def test_https_when_certificates_configured(monkeypatch):
    calls = []
    monkeypatch.setattr(run.uvicorn, "run", lambda app, **kwargs: calls.append(kwargs))
    monkeypatch.setattr(ServerConfig, "WORKERS", 1)
    monkeypatch.setattr(ServerConfig, "SSL_CERT_FILE", "cert.pem")
    monkeypatch.setattr(ServerConfig, "SSL_KEY_FILE", "key.pem")

    run.main()

    assert calls[0]["ssl_certfile"] == "cert.pem"
    assert calls[0]["workers"] is None
