import logging

import pytest

from policy_compiler import Compiler
from policy_parser import Parser

# Polityki testowe. Linie reguł i typów muszą zaczynać się od tabulacji.

IDENTICAL_RULES = (
    "SPEC HEADER\n"
    "SPEC POLICY\n"
    "\tP COLLECT data FROM actor FOR purpose\n"
    "\tR COLLECT data FROM actor FOR purpose\n"
)

CONTACT_HIERARCHY = (
    "SPEC HEADER\n"
    "\tD contact > email, phone\n"
    "SPEC POLICY\n"
    "\tP COLLECT email FROM user FOR marketing\n"
    "\tR COLLECT contact FROM user FOR marketing\n"
)

PROCUREMENT = (
    "SPEC HEADER\n"
    "SPEC POLICY\n"
    "\tO COLLECT po FROM supplier FOR procurement\n"
    "\tP TRANSFER po FROM supplier TO buyer FOR procurement\n"
)

SHOP = (
    "SPEC HEADER\n"
    "\tATTR NAMESPACE http://a\n"
    "SPEC POLICY\n"
    "\tP TRANSFER order FROM customer TO shipper FOR delivery\n"
)

COURIER = (
    "SPEC HEADER\n"
    "\tATTR NAMESPACE http://b\n"
    "SPEC POLICY\n"
    "\tP COLLECT parcel FROM merchant FOR delivery\n"
)

SHOP_TO_COURIER = (
    "# sklep -> kurier\n"
    "NS1 http://a merchant\n"
    "NS2 http://b shipper\n"
    "D order = parcel\n"
)


def compile_text(text: str, **kwargs):
    return Compiler(**kwargs).compile(Parser().parse(text))


@pytest.fixture
def parser():
    return Parser()


@pytest.fixture
def identical_comp():
    return compile_text(IDENTICAL_RULES)


@pytest.fixture
def hierarchy_comp():
    return compile_text(CONTACT_HIERARCHY)


@pytest.fixture
def procurement_comp():
    return compile_text(PROCUREMENT)


@pytest.fixture
def agent_files(tmp_path):
    """Pliki dwóch agentów (sklep wysyła do kuriera) z mapą usług."""
    (tmp_path / "shop.policy").write_text(SHOP, encoding="utf-8")
    (tmp_path / "courier.policy").write_text(COURIER, encoding="utf-8")
    (tmp_path / "shop-courier.map").write_text(SHOP_TO_COURIER, encoding="utf-8")
    (tmp_path / "shop.agent").write_text(
        "local shop.policy\n"
        "send shipper http://b shop-courier.map\n",
        encoding="utf-8",
    )
    (tmp_path / "courier.agent").write_text(
        "# kurier\n"
        "local courier.policy\n"
        "recv merchant http://a shop-courier.map\n",
        encoding="utf-8",
    )
    return tmp_path


@pytest.fixture
def clean_env(monkeypatch):
    for name in ("EDDY_LOG_LEVEL", "EDDY_BLOCK_SIZE", "EDDY_THREADS", "EDDY_BATCH_TIMEOUT", "EDDY_NAMESPACE"):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


@pytest.fixture
def restore_logging():
    """CLI konfiguruje główny logger; przywracamy go po teście."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
