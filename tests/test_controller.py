"""Tests for GvtController and configuration loading."""

import json

import pytest

from gvt.config import ConfigLoader, GvtConfig, MessageTemplates
from gvt.core.controller import GvtController
from gvt.errors import AlreadyInitialized, UninitializedRepository


@pytest.fixture
def temp_project(workdir):
    """Create a working directory with test files."""
    (workdir / "app.py").write_text("print('hello')")
    (workdir / "README.md").write_text("# Test")
    return workdir


@pytest.fixture
def controller(temp_project):
    return GvtController(project_root=temp_project)


def _write_global_config(tmp_home, data: dict) -> None:
    cfg_dir = tmp_home / ".config" / "gvt"
    cfg_dir.mkdir(parents=True, exist_ok=True)
    (cfg_dir / "config.json").write_text(json.dumps(data, indent=2), encoding="utf-8")


class TestGvtController:
    def test_init(self, controller, temp_project):
        assert not controller.is_initialized()

        controller.init()

        assert controller.is_initialized()
        assert (temp_project / ".gvt" / "0").is_dir()

    def test_init_twice(self, controller):
        controller.init()

        with pytest.raises(AlreadyInitialized):
            controller.init()

    def test_uninitialized_history(self, controller):
        with pytest.raises(UninitializedRepository):
            controller.history()

    def test_lifecycle(self, controller, temp_project):
        controller.init()
        controller.add("app.py")
        controller.add("README.md", "docs")
        (temp_project / "app.py").write_text("print('changed')")
        controller.commit("app.py")
        controller.detach("README.md")

        assert controller.store.latest() == 4
        assert controller.store.contents(4) == ["app.py"]
        assert [entry.id for entry in controller.history()] == [4, 3, 2, 1, 0]
        assert controller.version(2).message == "docs"

        controller.checkout(1)
        assert (temp_project / "app.py").read_text() == "print('hello')"

    def test_history_default_limit(self, temp_project):
        config = GvtConfig.from_dict({"history": {"defaultLimit": 1}})
        controller = GvtController(project_root=temp_project, config=config)
        controller.init()
        controller.add("app.py")

        assert [entry.id for entry in controller.history()] == [1]
        assert [entry.id for entry in controller.history(5)] == [1, 0]

    def test_control_dir_from_config(self, temp_project):
        (temp_project / ".gvt.json").write_text(json.dumps({"controlDir": ".versions"}))
        controller = GvtController(project_root=temp_project)

        controller.init()

        assert (temp_project / ".versions" / ".latest_version").exists()
        assert not (temp_project / ".gvt").exists()

    def test_control_dir_cannot_be_tracked(self, controller):
        controller.init()
        result = controller.detach(".gvt/.latest_version")

        assert not result.changed


class TestConfigLoader:
    def test_defaults(self, temp_project):
        cfg = ConfigLoader(project_root=temp_project).load()

        assert cfg.control_dir == ".gvt"
        assert cfg.history.default_limit is None
        assert cfg.messages == MessageTemplates()

    def test_project_overrides_global(self, tmp_path, temp_project):
        _write_global_config(tmp_path, {"history": {"defaultLimit": 5}, "messages": {"add": "g {file}"}})
        (temp_project / ".gvt.json").write_text(json.dumps({"messages": {"add": "p {file}"}}))

        cfg = ConfigLoader(project_root=temp_project).load()

        assert cfg.history.default_limit == 5
        assert cfg.messages.render("add", "x.txt") == "p x.txt"
        assert cfg.messages.render("commit", "x.txt") == "File committed successfully. File: x.txt"

    def test_invalid_json_falls_back(self, temp_project):
        (temp_project / ".gvt.json").write_text("{not json")

        cfg = ConfigLoader(project_root=temp_project).load()

        assert cfg == GvtConfig()

    @pytest.mark.parametrize("control_dir", ["", "../up", "a/b", ".", 5])
    def test_invalid_control_dir(self, control_dir):
        assert GvtConfig.from_dict({"controlDir": control_dir}).control_dir == ".gvt"

    @pytest.mark.parametrize("limit", [-1, "3", True])
    def test_invalid_default_limit(self, limit):
        assert GvtConfig.from_dict({"history": {"defaultLimit": limit}}).history.default_limit is None

    def test_broken_template_falls_back(self):
        messages = MessageTemplates.from_dict({"detach": "drop {name}"})

        assert messages.render("detach", "f") == "File detached successfully. File: f"

    def test_reload(self, temp_project):
        loader = ConfigLoader(project_root=temp_project)
        assert loader.config.control_dir == ".gvt"

        (temp_project / ".gvt.json").write_text(json.dumps({"controlDir": ".other"}))

        assert loader.config.control_dir == ".gvt"
        assert loader.reload().control_dir == ".other"
