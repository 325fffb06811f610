import json
import zipfile

import pytest

from cmpkg_tool.api.exceptions import (
    FolderNotFoundError,
    ManifestEntryNotFoundError,
    ManifestFormatError,
    ManifestNotFoundError,
    PackError,
)
from cmpkg_tool.api.packer import Packer, pack
from cmpkg_tool.services.package_service import PackageService

EXPECTED_ORDER = [
    "manifesto.dat",
    "_scripts01.zip",
    "lib1.dll",
    "lib2.dll",
    "app.exe",
    "readme.txt",
]


def archive_names(path):
    with zipfile.ZipFile(path) as zf:
        return zf.namelist()


@pytest.fixture
def service():
    return PackageService()


class TestPackageService:

    def test_pack(self, service, package_folder):
        result = service.pack(package_folder)

        assert result.archive_path == package_folder / "mypkg_1_0.cmpkg"
        assert result.files == EXPECTED_ORDER
        assert result.warnings == []
        assert archive_names(result.archive_path) == EXPECTED_ORDER

    def test_written_manifest(self, service, package_folder):
        result = service.pack(package_folder)

        data = json.loads(result.manifest_path.read_text(encoding="utf-8"))
        assert list(data) == ["nome", "versao", "arquivos", "descricao", "develop"]
        assert data["develop"] is False
        assert data["arquivos"][0] == {"nome": "manifesto.dat"}
        assert data["arquivos"][1] == {"nome": "_scripts01.zip", "destino": "scripts"}
        assert {"nome": "app.exe", "destino": "client", "executavel": True} in data["arquivos"]
        assert {"nome": "readme.txt"} in data["arquivos"]

        with zipfile.ZipFile(result.archive_path) as zf:
            assert json.loads(zf.read("manifesto.dat").decode("utf-8")) == data

    def test_version_override_and_develop(self, service, package_folder):
        result = service.pack(package_folder, version=" 2.5.1 ", develop=True)

        assert result.archive_path.name == "mypkg_2_5_1.cmpkg"
        data = json.loads(result.manifest_path.read_text(encoding="utf-8"))
        assert data["versao"] == "2.5.1"
        assert data["develop"] is True

    def test_company_code_in_archive_name(self, service, package_folder, write_json):
        write_json(package_folder / "manifesto.server", {
            "nome": "My Pkg", "versao": "1.0", "siglaEmpresa": "ACME",
        })
        result = service.pack(package_folder)
        assert result.archive_path.name == "acme-mypkg_1_0.cmpkg"

    def test_output_folder(self, service, package_folder, tmp_path):
        output = tmp_path / "out" / "nested"
        result = service.pack(package_folder, output=output)

        assert result.archive_path == output / "mypkg_1_0.cmpkg"
        assert result.manifest_path == package_folder / "manifesto.dat"
        assert not (package_folder / "mypkg_1_0.cmpkg").exists()

    def test_previous_archives_removed(self, service, package_folder):
        (package_folder / "mypkg_0_9.cmpkg").write_bytes(b"old")
        (package_folder / "MyPkg_0_8.CMPKG").write_bytes(b"old")
        (package_folder / "other_1_0.cmpkg").write_bytes(b"other")

        result = service.pack(package_folder)

        assert not (package_folder / "mypkg_0_9.cmpkg").exists()
        assert not (package_folder / "MyPkg_0_8.CMPKG").exists()
        assert (package_folder / "other_1_0.cmpkg").exists()
        assert "mypkg_0_9.cmpkg" not in result.files
        # unrelated archives are ordinary package files
        assert "other_1_0.cmpkg" in result.files

    def test_repack_is_stable(self, service, package_folder):
        first = service.pack(package_folder)
        second = service.pack(package_folder)
        assert first.files == second.files == EXPECTED_ORDER

    def test_local_manifest(self, service, package_folder, write_json):
        (package_folder / "manifesto.server").unlink()
        write_json(package_folder / "manifesto.local", {"nome": "Local", "versao": "3"})

        result = service.pack(package_folder)

        assert result.archive_path.name == "local_3.cmpkg"
        assert "manifesto.local" not in result.files

    def test_missing_folder(self, service, tmp_path):
        with pytest.raises(FolderNotFoundError):
            service.pack(tmp_path / "missing")

    def test_missing_manifest(self, service, tmp_path):
        with pytest.raises(ManifestNotFoundError):
            service.pack(tmp_path)

    def test_invalid_manifest(self, service, package_folder):
        (package_folder / "manifesto.server").write_text('{"nome": "x"}', encoding="utf-8")
        with pytest.raises(ManifestFormatError) as exc_info:
            service.pack(package_folder)
        assert "versao" in str(exc_info.value)

    def test_manifest_not_json(self, service, package_folder):
        (package_folder / "manifesto.server").write_text("nome: x", encoding="utf-8")
        with pytest.raises(ManifestFormatError):
            service.pack(package_folder)

    def test_manifest_not_utf8(self, service, package_folder):
        (package_folder / "manifesto.server").write_bytes(b'{"nome": "\xff\xfe", "versao": "1"}')
        with pytest.raises(ManifestFormatError) as exc_info:
            service.pack(package_folder)
        assert "manifesto.server" in str(exc_info.value)

    def test_resolution_failure_writes_nothing(self, service, package_folder, write_json):
        write_json(package_folder / "manifesto.server", {
            "nome": "My Pkg", "versao": "1.0", "arquivos": [{"nome": "missing.bin"}],
        })
        (package_folder / "mypkg_0_9.cmpkg").write_bytes(b"old")

        with pytest.raises(ManifestEntryNotFoundError):
            service.pack(package_folder)

        assert not (package_folder / "manifesto.dat").exists()
        assert (package_folder / "mypkg_0_9.cmpkg").exists()

    def test_blank_name_is_pack_error(self, service, package_folder, write_json):
        write_json(package_folder / "manifesto.server", {"nome": "   ", "versao": "1.0"})
        with pytest.raises(PackError):
            service.pack(package_folder)


class TestPacker:

    def test_pack_function(self, package_folder):
        result = pack(str(package_folder), develop=True)
        assert result.archive_path.is_file()

    def test_pack_scripts(self, tmp_path, write_json):
        write_json(tmp_path / "config.json", {})
        (tmp_path / "001.sql").write_text("select 1;")

        result = Packer().pack_scripts(tmp_path)

        assert result.generated == [tmp_path / "_scripts.zip"]
