from __future__ import annotations

from pathlib import Path

import allure

from forge_cli.blueprints import BUNDLED_BLUEPRINTS_DIR
from forge_cli.project import Project

pytestmark = [
    allure.epic("Commands"),
    allure.feature("Project context"),
]


def test_closest_walks_up_to_marker(tmp_path: Path) -> None:
    (tmp_path / "forge.json").write_text("{}", "utf-8")
    nested = tmp_path / "src" / "deep"
    nested.mkdir(parents=True)

    project = Project.closest(nested)

    assert project.root == tmp_path.resolve()
    assert project.is_forge_project()


def test_closest_without_marker_uses_start(tmp_path: Path) -> None:
    project = Project.closest(tmp_path)

    assert project.root == tmp_path.resolve()
    assert not project.is_forge_project()
    assert project.name == tmp_path.name


def test_blueprint_lookup_paths_order(tmp_path: Path) -> None:
    (tmp_path / "forge.json").write_text("{}", "utf-8")
    extra = tmp_path / "shared"

    paths = Project(root=tmp_path).blueprint_lookup_paths((extra,))

    assert paths == (tmp_path / "blueprints", extra, BUNDLED_BLUEPRINTS_DIR)


def test_blueprint_lookup_paths_outside_project(tmp_path: Path) -> None:
    assert Project(root=tmp_path).blueprint_lookup_paths() == (BUNDLED_BLUEPRINTS_DIR,)
