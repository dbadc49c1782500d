import json

import pytest

TOKEN = "vErrYS3c3tReFRe$hToken"

SAMPLE_CONFIG = {
    "contexts": [
        {"name": "argocd1.example.com:443", "server": "argocd1.example.com:443", "user": "argocd1.example.com:443"},
        {"name": "argocd2.example.com:443", "server": "argocd2.example.com:443", "user": "argocd2.example.com:443"},
        {"name": "localhost:8080", "server": "localhost:8080", "user": "localhost:8080"},
    ],
    "current-context": "localhost:8080",
    "servers": [
        {"server": "argocd1.example.com:443"},
        {"server": "argocd2.example.com:443"},
        {"server": "localhost:8080", "plain-text": True},
    ],
    "users": [
        {"name": "argocd1.example.com:443", "auth-token": TOKEN, "refresh-token": TOKEN},
        {"name": "argocd2.example.com:443", "auth-token": TOKEN, "refresh-token": TOKEN},
        {"name": "localhost:8080", "auth-token": TOKEN},
    ],
}


def make_config(names, current=""):
    """Build a config dict with one server and user per context name"""
    return {
        "contexts": [{"name": n, "server": f"{n}.example.com", "user": n} for n in names],
        "current-context": current,
        "servers": [{"server": f"{n}.example.com"} for n in names],
        "users": [{"name": n, "auth-token": TOKEN} for n in names],
    }


@pytest.fixture
def config_path(tmp_path):
    """Path of a config file populated with the sample contexts"""
    path = tmp_path / "config"
    path.write_text(json.dumps(SAMPLE_CONFIG, indent=2))
    return path
