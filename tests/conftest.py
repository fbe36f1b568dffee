import pytest

from miplibinfo.catalog import Catalog


@pytest.fixture
def catalog() -> Catalog:
    return Catalog(["inst-a", "inst-b", "inst-c"])
