"""Admin Basic-auth checks"""
import base64

import pytest

from safarsorted.core.config import Settings
from safarsorted.core.security import authenticate, parse_basic_auth, uses_default_credentials

USER = "admin-ops"
PASS = "p@ss:word"


def _header(raw: str) -> str:
    return "Basic " + base64.b64encode(raw.encode("utf-8")).decode("ascii")


def test_correct_credentials():
    assert authenticate(_header(f"{USER}:{PASS}"), USER, PASS) is True


def test_password_split_on_first_colon():
    assert parse_basic_auth(_header("u:a:b")) == ("u", "a:b")


@pytest.mark.parametrize(
    "header",
    [
        None,
        "",
        _header(f"{USER}:wrong"),
        _header(f"someone:{PASS}"),
        _header(f"{USER}{PASS}"),  # no colon
        "Bearer " + base64.b64encode(f"{USER}:{PASS}".encode()).decode(),
        "Basic",
        "Basic !!!not-base64!!!",
    ],
)
def test_rejected_headers(header):
    assert authenticate(header, USER, PASS) is False


def test_scheme_is_case_insensitive():
    raw = base64.b64encode(f"{USER}:{PASS}".encode()).decode()
    assert authenticate(f"basic {raw}", USER, PASS) is True


def test_default_credentials_detected(monkeypatch):
    monkeypatch.delenv("ADMIN_USER", raising=False)
    monkeypatch.delenv("ADMIN_PASS", raising=False)
    assert uses_default_credentials(Settings(_env_file=None)) is True
    assert uses_default_credentials(Settings(_env_file=None, ADMIN_USER="x", ADMIN_PASS="y")) is False


def test_blank_configured_login_never_matches():
    assert authenticate(_header(":"), "", "") is False
    assert uses_default_credentials(Settings(_env_file=None, ADMIN_USER="", ADMIN_PASS="")) is True
