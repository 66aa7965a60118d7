"""
tests/test_materials.py
=======================
Default thermoelectric materials and the material catalog.
"""

import pytest

from teg_brake_recovery.teg.materials import (
    MaterialType, ThermoelectricMaterial, MaterialCatalog, create_default_materials
)


@pytest.fixture
def catalog():
    return MaterialCatalog()


@pytest.fixture
def custom_material():
    return ThermoelectricMaterial(
        name="Test Alloy", material_type=MaterialType.P_TYPE,
        seebeck_coefficient=150.0, electrical_conductivity=60000.0, thermal_conductivity=1.4,
        zt_value=0.8, operating_temp_range=(0.0, 250.0), density=7000.0,
        specific_heat=160.0, thermal_expansion=15e-6, cost=120.0
    )


class TestDefaultMaterials:

    def test_eight_default_materials(self):
        assert len(create_default_materials()) == 8

    def test_pairs_have_matching_types(self):
        materials = create_default_materials()
        for family in ("Bi2Te3", "PbTe", "SiGe", "CoSb3"):
            assert materials[f"{family}_pType"].material_type == MaterialType.P_TYPE
            assert materials[f"{family}_nType"].material_type == MaterialType.N_TYPE

    def test_n_type_seebeck_is_negative(self):
        for material_id, material in create_default_materials().items():
            if material.material_type == MaterialType.N_TYPE:
                assert material.seebeck_coefficient < 0, material_id

    def test_bismuth_telluride_range(self):
        material = create_default_materials()["Bi2Te3_pType"]
        assert material.min_operating_temp == -40.0
        assert material.max_operating_temp == 200.0


class TestMaterialCatalog:

    def test_catalog_starts_with_defaults(self, catalog):
        assert len(catalog) == 8
        assert "PbTe_nType" in catalog

    def test_empty_catalog(self):
        assert len(MaterialCatalog(include_defaults=False)) == 0

    def test_add_defaults_key_to_name(self, catalog, custom_material):
        key = catalog.add(custom_material)
        assert key == "Test Alloy"
        assert catalog.get("Test Alloy") is custom_material

    def test_add_with_explicit_id(self, catalog, custom_material):
        catalog.add(custom_material, "alloy_p")
        assert "alloy_p" in catalog.ids()

    def test_unknown_material_raises(self, catalog):
        with pytest.raises(KeyError):
            catalog.get("Unobtainium")

    def test_snapshot_is_independent(self, catalog):
        snapshot = catalog.snapshot()
        snapshot.clear()
        assert len(catalog) == 8

    def test_to_dict_uses_plain_values(self, catalog):
        data = catalog.get("SiGe_nType").to_dict()
        assert data["material_type"] == "n-type"
        assert data["operating_temp_range"] == [600.0, 1000.0]
