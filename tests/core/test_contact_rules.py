"""
Tests for the shared contact inquiry rules.
"""
import ast
from pathlib import Path

import pytest

from backend.core.contact_rules import CLEARANCE_LABELS, ClearanceLevel, is_valid_email

BACKEND_DIR = Path(__file__).resolve().parents[2] / "backend"


def imported_modules(path: Path) -> set[str]:
    tree = ast.parse(path.read_text(encoding="utf-8"))
    modules = set()
    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            modules.update(alias.name for alias in node.names)
        elif isinstance(node, ast.ImportFrom) and node.module:
            modules.add(node.module)
    return modules


class TestContactRules:
    """Tests for constants and the email check."""

    def test_every_clearance_level_has_label(self):
        assert set(CLEARANCE_LABELS) == {level.value for level in ClearanceLevel}

    @pytest.mark.parametrize("email, expected", [("a@b.co", True), ("a@b", False), ("", False)])
    def test_is_valid_email(self, email, expected):
        assert is_valid_email(email) is expected


class TestPackageBoundary:
    """The backend never depends on the client package."""

    def test_backend_does_not_import_frontend(self):
        offenders = {
            str(path.relative_to(BACKEND_DIR)): sorted(
                module for module in imported_modules(path) if module.split(".")[0] == "frontend"
            )
            for path in BACKEND_DIR.rglob("*.py")
        }

        assert {path: modules for path, modules in offenders.items() if modules} == {}
