import pytest

from cmpkg_tool.api.exceptions import FolderNotFoundError
from cmpkg_tool.core.discovery import DeployUnitDiscoverer


@pytest.fixture
def discoverer():
    return DeployUnitDiscoverer()


@pytest.mark.asyncio
async def test_missing_folder(discoverer, tmp_path):
    with pytest.raises(FolderNotFoundError):
        await discoverer.discover(tmp_path / "missing")


@pytest.mark.asyncio
async def test_empty_folder(discoverer, deploy_folder):
    result = await discoverer.discover(deploy_folder)
    assert result.units == []
    assert result.warnings == []
    assert result.errors == []


@pytest.mark.asyncio
async def test_unit_with_matching_archive(discoverer, deploy_folder, add_unit):
    payload = {"nome": "My Pkg", "versao": "1.2.3", "develop": True, "siglaEmpresa": "ACME", "canal": "beta"}
    add_unit(deploy_folder, "pkg.dat", payload, "acme-mypkg_1_2_3.cmpkg")

    result = await discoverer.discover(deploy_folder)

    assert len(result.units) == 1
    unit = result.units[0]
    assert unit.package_name == "My Pkg"
    assert unit.version == "1.2.3"
    assert unit.is_development_build is True
    assert unit.company_code == "ACME"
    assert unit.archive_name == "acme-mypkg_1_2_3.cmpkg"
    assert unit.manifest_path == deploy_folder / "pkg.dat"
    assert unit.payload() == payload


@pytest.mark.asyncio
async def test_develop_defaults_to_false(discoverer, deploy_folder, add_unit):
    add_unit(deploy_folder, "pkg.dat", {"nome": "pkg", "versao": "1"}, "pkg_1.cmpkg")
    result = await discoverer.discover(deploy_folder)
    assert result.units[0].is_development_build is False
    assert result.units[0].company_code is None


@pytest.mark.asyncio
async def test_archive_renamed_when_name_differs(discoverer, deploy_folder, add_unit):
    add_unit(deploy_folder, "pkg.dat", {"nome": "pkg", "versao": "2.0"}, "build-output.cmpkg")

    result = await discoverer.discover(deploy_folder)

    assert result.units[0].archive_path == deploy_folder / "pkg_2_0.cmpkg"
    assert (deploy_folder / "pkg_2_0.cmpkg").is_file()
    assert not (deploy_folder / "build-output.cmpkg").exists()


@pytest.mark.asyncio
async def test_missing_archive_drops_unit(discoverer, deploy_folder, add_unit):
    add_unit(deploy_folder, "pkg.dat", {"nome": "pkg", "versao": "2.0"})

    result = await discoverer.discover(deploy_folder)

    assert result.units == []
    assert len(result.warnings) == 1
    assert "archive not found" in result.warnings[0]


@pytest.mark.asyncio
async def test_bad_descriptors_do_not_stop_discovery(discoverer, deploy_folder, add_unit):
    (deploy_folder / "a_broken.dat").write_text("{not json", encoding="utf-8")
    (deploy_folder / "b_list.dat").write_text("[1, 2]", encoding="utf-8")
    add_unit(deploy_folder, "c_noversion.dat", {"nome": "pkg"})
    add_unit(deploy_folder, "d_flag.dat", {"nome": "pkg", "versao": "1", "develop": "yes"})
    add_unit(deploy_folder, "e_good.dat", {"nome": "good", "versao": "1"}, "good_1.cmpkg")

    result = await discoverer.discover(deploy_folder)

    assert [u.package_name for u in result.units] == ["good"]
    assert len(result.errors) == 4
    assert result.errors[0].startswith("a_broken.dat")
    assert "invalid JSON" in result.errors[0]
    assert "JSON object" in result.errors[1]
    assert "versao" in result.errors[2]
    assert "develop" in result.errors[3]


@pytest.mark.asyncio
async def test_undecodable_descriptor_is_recorded(discoverer, deploy_folder, add_unit):
    (deploy_folder / "a_bad.dat").write_bytes(b'{"nome": "\xff\xfe"}')
    add_unit(deploy_folder, "b_good.dat", {"nome": "good", "versao": "1"}, "good_1.cmpkg")

    result = await discoverer.discover(deploy_folder)

    assert [u.package_name for u in result.units] == ["good"]
    assert len(result.errors) == 1
    assert result.errors[0].startswith("a_bad.dat: cannot read descriptor")


@pytest.mark.asyncio
async def test_archive_of_another_descriptor_is_not_adopted(discoverer, deploy_folder, add_unit):
    add_unit(deploy_folder, "a.dat", {"nome": "alpha", "versao": "1"})
    add_unit(deploy_folder, "b.dat", {"nome": "beta", "versao": "1"}, "beta_1.cmpkg")

    result = await discoverer.discover(deploy_folder)

    assert [u.package_name for u in result.units] == ["beta"]
    assert result.units[0].archive_path == deploy_folder / "beta_1.cmpkg"
    assert (deploy_folder / "beta_1.cmpkg").is_file()
    assert not (deploy_folder / "alpha_1.cmpkg").exists()
    assert result.warnings == ["a.dat: archive not found (alpha_1.cmpkg)"]


@pytest.mark.asyncio
async def test_only_unclaimed_archive_is_adopted(discoverer, deploy_folder, add_unit):
    add_unit(deploy_folder, "a.dat", {"nome": "alpha", "versao": "1"})
    add_unit(deploy_folder, "b.dat", {"nome": "beta", "versao": "1"}, "beta_1.cmpkg")
    (deploy_folder / "build.cmpkg").write_bytes(b"PK\x05\x06" + b"\x00" * 18)

    result = await discoverer.discover(deploy_folder)

    assert [(u.package_name, u.archive_name) for u in result.units] == [
        ("alpha", "alpha_1.cmpkg"),
        ("beta", "beta_1.cmpkg"),
    ]
    assert all(u.archive_path.is_file() for u in result.units)
    assert not (deploy_folder / "build.cmpkg").exists()


@pytest.mark.asyncio
async def test_units_in_descriptor_order(discoverer, deploy_folder, add_unit):
    add_unit(deploy_folder, "b.dat", {"nome": "beta", "versao": "1"}, "beta_1.cmpkg")
    add_unit(deploy_folder, "a.dat", {"nome": "alpha", "versao": "1"}, "alpha_1.cmpkg")

    result = await discoverer.discover(deploy_folder)

    assert [u.package_name for u in result.units] == ["alpha", "beta"]
