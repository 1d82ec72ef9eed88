from __future__ import annotations

from webcontainer.shared.env import resolve_secret_files


def test_secret_files_populate_missing_variables(tmp_path) -> None:
    secret = tmp_path / "key_password"
    secret.write_text("s3cret\n", encoding="utf-8")
    environ = {
        "SSL_KEY_PASSWORD_FILE": str(secret),
        "ALREADY_SET_FILE": str(secret),
        "ALREADY_SET": "kept",
    }

    resolved = resolve_secret_files(environ)

    assert resolved == ["SSL_KEY_PASSWORD"]
    assert environ["SSL_KEY_PASSWORD"] == "s3cret"
    assert environ["ALREADY_SET"] == "kept"


def test_unreadable_secret_files_are_skipped(tmp_path) -> None:
    environ = {"TOKEN_FILE": str(tmp_path / "missing"), "EMPTY_FILE": ""}

    assert resolve_secret_files(environ) == []
    assert "TOKEN" not in environ
