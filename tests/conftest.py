"""Shared fixtures for cmpkg-tool tests"""

import json
import logging
from pathlib import Path

import pytest

from cmpkg_tool.api.exceptions import StorageError
from cmpkg_tool.models import NotifyResult
from cmpkg_tool.storage.base import ObjectState, StorageBackend

CREDENTIALS_ENV = {
    "AWS_ACCESS_KEY_ID": "AKIATEST",
    "AWS_SECRET_ACCESS_KEY": "secret",
}


class FakeStorage(StorageBackend):
    """In-memory storage backend recording every call"""

    def __init__(self, bucket="ncr-colibri", existing=(), fail_exists=(), fail_upload=()):
        super().__init__(bucket)
        self.existing = set(existing)
        self.fail_exists = set(fail_exists)
        self.fail_upload = set(fail_upload)
        self.exists_calls = []
        self.uploads = []

    async def exists(self, key):
        self.exists_calls.append(key)
        if key in self.fail_exists:
            raise StorageError(f"Access denied: {key}")
        return ObjectState.FOUND if key in self.existing else ObjectState.NOT_FOUND

    async def upload(self, local_path, key, metadata, content_type):
        if key in self.fail_upload:
            raise RuntimeError("connection reset")
        self.uploads.append((Path(local_path), key, metadata, content_type))
        return self.url_for(key)

    def url_for(self, key):
        return f"https://{self.bucket}.s3.amazonaws.com/{key}"


class FakeMarketplace:
    """Marketplace client double"""

    def __init__(self, result=None, on_notify=None):
        self.result = result or NotifyResult(success=True, status=200)
        self.on_notify = on_notify
        self.calls = []

    async def notify_unit(self, base_url, unit):
        self.calls.append((base_url, unit))
        if self.on_notify:
            self.on_notify(unit)
        return self.result


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep the host environment out of the tests"""
    for name in ("AWS_ACCESS_KEY_ID", "AWS_SECRET_ACCESS_KEY", "AWS_REGION",
                 "STAGE", "TEST", "CMPKG_TOOL_CONFIG", "MARKETPLACE_JWT_SECRET"):
        monkeypatch.delenv(name, raising=False)
    yield
    logging.disable(logging.NOTSET)


@pytest.fixture
def write_json():
    """Write a JSON document to a path"""

    def _write(path: Path, data) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(data), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def deploy_folder(tmp_path):
    folder = tmp_path / "deploy"
    folder.mkdir()
    return folder


@pytest.fixture
def add_unit(write_json):
    """Add a descriptor and its archive to a deploy folder"""

    def _add(folder: Path, descriptor: str, payload: dict, archive: str = None) -> Path:
        write_json(folder / descriptor, payload)
        if archive:
            (folder / archive).write_bytes(b"PK\x05\x06" + b"\x00" * 18)
        return folder / descriptor

    return _add


@pytest.fixture
def package_folder(tmp_path, write_json):
    """Package folder with a manifest source and a few files"""
    folder = tmp_path / "release"
    folder.mkdir()
    write_json(folder / "manifesto.server", {
        "nome": "My Pkg",
        "versao": "1.0",
        "arquivos": [
            {"nome": "app.exe", "destino": "client", "executavel": True},
            {"_pattern_nome": r"^lib.*\.dll$", "destino": "shared"},
        ],
        "descricao": "Release bundle",
    })
    for name in ("app.exe", "lib1.dll", "lib2.dll", "readme.txt", "_scripts01.zip"):
        (folder / name).write_bytes(name.encode("utf-8"))
    return folder
