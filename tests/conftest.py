from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator

import pytest

from hubgen.codegen import DeclaredTypeRegistry
from tests._fixtures.contracts import YAML_CONTRACT


@pytest.fixture
def registry() -> DeclaredTypeRegistry:
    """Fresh registry for one simulated generation pass."""
    return DeclaredTypeRegistry()


@pytest.fixture
def contract_file(tmp_path: Path) -> Path:
    """YAML contract document written under the pytest tmp_path."""
    path = tmp_path / "contract.yml"
    path.write_text(YAML_CONTRACT, encoding="utf-8")
    return path


@pytest.fixture(autouse=True)
def _reset_hubgen_logging() -> Iterator[None]:
    """Drop handlers installed by CLI runs so later tests start clean."""
    yield
    logger = logging.getLogger("hubgen")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
