"""
Import Boundary Tests.

Validates that architectural import rules are followed:
- web/services/* may NOT import directly from utils/
- core/* may NOT import from web/, flask, werkzeug
- only core/store.py talks to utils.db functions; other core modules may
  read its constants
"""

import ast
from pathlib import Path


def get_project_root() -> Path:
    """Get the project root directory."""
    return Path(__file__).parent.parent


def get_imports_from_file(filepath: Path) -> list[tuple[str, int]]:
    """
    Extract all import statements from a Python file.

    Returns:
        List of (module_name, line_number) tuples
    """
    imports = []
    try:
        with open(filepath, encoding="utf-8") as f:
            tree = ast.parse(f.read(), filename=str(filepath))
    except SyntaxError:
        return imports

    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            for alias in node.names:
                imports.append((alias.name, node.lineno))
        elif isinstance(node, ast.ImportFrom):
            if node.module:
                imports.append((node.module, node.lineno))

    return imports


def get_imported_names(filepath: Path, module: str) -> list[str]:
    """Names pulled in via ``from <module> import ...``."""
    with open(filepath, encoding="utf-8") as f:
        tree = ast.parse(f.read(), filename=str(filepath))

    names = []
    for node in ast.walk(tree):
        if isinstance(node, ast.ImportFrom) and node.module == module:
            names.extend(alias.name for alias in node.names)
    return names


def check_forbidden_imports(
    imports: list[tuple[str, int]], forbidden_prefixes: list[str]
) -> list[tuple[str, int]]:
    """
    Check for forbidden imports.

    Returns:
        List of (module_name, line_number) for violations
    """
    violations = []
    for module, line in imports:
        for prefix in forbidden_prefixes:
            if module == prefix.rstrip(".") or module.startswith(prefix):
                violations.append((module, line))
                break
    return violations


class TestWebLayerBoundaries:
    """Tests for web layer import boundaries."""

    def test_services_only_import_from_core(self):
        """web/services/* must reach the database through core only."""
        services_dir = get_project_root() / "web" / "services"

        all_violations = []
        for py_file in services_dir.glob("*.py"):
            imports = get_imports_from_file(py_file)
            for module, line in check_forbidden_imports(imports, ["utils."]):
                all_violations.append(f"{py_file.name}:{line} imports {module}")

        assert len(all_violations) == 0, (
            "Services must not import utils directly. Violations:\n"
            + "\n".join(all_violations)
        )

    def test_blueprints_do_not_import_utils(self):
        blueprints_dir = get_project_root() / "web" / "blueprints"

        all_violations = []
        for py_file in blueprints_dir.glob("*.py"):
            imports = get_imports_from_file(py_file)
            for module, line in check_forbidden_imports(imports, ["utils."]):
                all_violations.append(f"{py_file.name}:{line} imports {module}")

        assert all_violations == []

    def test_core_does_not_import_web(self):
        """core/* must stay usable without Flask."""
        core_dir = get_project_root() / "core"
        forbidden = ["web.", "flask", "werkzeug"]

        all_violations = []
        for py_file in core_dir.glob("*.py"):
            imports = get_imports_from_file(py_file)
            for module, line in check_forbidden_imports(imports, forbidden):
                all_violations.append(f"{py_file.name}:{line} imports {module}")

        assert len(all_violations) == 0, (
            "Core must not import the web layer. Violations:\n"
            + "\n".join(all_violations)
        )

    def test_only_store_calls_db_functions(self):
        """
        Core modules other than store.py may read constants from utils.db
        but must not call its query functions.
        """
        core_dir = get_project_root() / "core"

        all_violations = []
        for py_file in core_dir.glob("*.py"):
            if py_file.name == "store.py":
                continue
            for name in get_imported_names(py_file, "utils.db"):
                if not name.isupper():
                    all_violations.append(f"{py_file.name} imports {name}")
            for module, line in get_imports_from_file(py_file):
                if module == "utils" or module.startswith("utils.db."):
                    all_violations.append(f"{py_file.name}:{line} imports {module}")

        assert len(all_violations) == 0, (
            "Only core/store.py may query the database. Violations:\n"
            + "\n".join(all_violations)
        )


class TestModuleStructure:
    """Tests for module structure integrity."""

    def test_core_modules_exist(self):
        core_dir = get_project_root() / "core"

        required_modules = [
            "errors.py",
            "store.py",
            "chores_core.py",
            "config_core.py",
            "events_core.py",
            "system_core.py",
        ]

        missing = [m for m in required_modules if not (core_dir / m).exists()]

        assert len(missing) == 0, f"Missing core modules: {missing}"

    def test_service_modules_exist(self):
        services_dir = get_project_root() / "web" / "services"

        required_modules = [
            "chores_service.py",
            "settings_service.py",
            "events_service.py",
            "health_service.py",
            "auth_service.py",
        ]

        missing = [m for m in required_modules if not (services_dir / m).exists()]

        assert len(missing) == 0, f"Missing service modules: {missing}"
