from __future__ import annotations

import sys
from pathlib import Path

import pytest

from batchimport import ErrorKind, Settings, import_scripts
from batchimport.loaders import ModuleLoader, NamespaceLoader, RecordingLoader


def _write(path: Path, body: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(body, encoding="utf-8")
    return path


@pytest.fixture
def module_package(tmp_path):
    package = f"batchimport_test_{tmp_path.name}"
    yield package
    for name in [name for name in sys.modules if name.startswith(f"{package}.")]:
        del sys.modules[name]


def test_namespace_loader_shares_names_between_scripts(tmp_path):
    _write(tmp_path / "scripts" / "a_base.py", "BASE = 41\n")
    _write(tmp_path / "scripts" / "b_next.py", "ANSWER = BASE + 1\nSEEN_FILE = __file__\n")
    loader = NamespaceLoader()

    errors = import_scripts([str(tmp_path / "scripts")], loader=loader, settings=Settings())

    assert errors == []
    assert loader.namespace["ANSWER"] == 42
    assert loader.namespace["SEEN_FILE"] == str(tmp_path / "scripts" / "b_next.py")
    assert "__file__" not in loader.namespace


def test_namespace_loader_uses_given_mapping(tmp_path):
    script = _write(tmp_path / "setter.py", "registry.append('loaded')\n")
    namespace = {"registry": []}

    NamespaceLoader(namespace).load(str(script))

    assert namespace["registry"] == ["loaded"]


def test_runtime_error_details_point_into_the_script(tmp_path):
    script = _write(tmp_path / "broken.py", "x = 1\nraise ValueError('bad value')\n")

    errors = import_scripts([str(script)], loader=NamespaceLoader(), settings=Settings())

    assert len(errors) == 1
    record = errors[0]
    assert record.kind is ErrorKind.LOAD_FAILURE
    assert record.details.internal == "bad value"
    assert record.details.file == str(script)
    assert record.details.line == 2
    assert "ValueError: bad value" in record.details.trace


def test_syntax_error_details_use_error_location(tmp_path):
    script = _write(tmp_path / "syntax.py", "ok = True\n\ndef broken(:\n    pass\n")

    errors = import_scripts([str(script)], loader=NamespaceLoader(), settings=Settings())

    assert errors[0].kind is ErrorKind.LOAD_FAILURE
    assert errors[0].details.file == str(script)
    assert errors[0].details.line == 3


def test_module_loader_registers_modules(tmp_path, module_package):
    script = _write(tmp_path / "my-plugin.py", "NAME = 'plugin'\n")
    loader = ModuleLoader(package=module_package)

    errors = import_scripts([str(script)], loader=loader, settings=Settings())

    assert errors == []
    name = f"{module_package}.my_plugin"
    assert loader.modules[name].NAME == "plugin"
    assert sys.modules[name] is loader.modules[name]


def test_module_loader_keeps_same_stem_from_different_directories(tmp_path, module_package):
    first = _write(tmp_path / "one" / "task.py", "WHO = 'one'\n")
    second = _write(tmp_path / "two" / "task.py", "WHO = 'two'\n")
    loader = ModuleLoader(package=module_package)

    import_scripts([str(first), str(second)], loader=loader, settings=Settings())

    assert [module.WHO for module in loader.modules.values()] == ["one", "two"]


def test_module_loader_drops_failed_module(tmp_path, module_package):
    script = _write(tmp_path / "explode.py", "raise RuntimeError('nope')\n")
    loader = ModuleLoader(package=module_package)

    errors = import_scripts([str(script)], loader=loader, settings=Settings())

    assert [record.kind for record in errors] == [ErrorKind.LOAD_FAILURE]
    assert f"{module_package}.explode" not in sys.modules
    assert loader.modules == {}


def test_recording_loader_fails_on_demand():
    loader = RecordingLoader({"a.py": KeyError("a")})
    loader.fail_on("b.py")

    with pytest.raises(KeyError):
        loader.load("a.py")
    with pytest.raises(RuntimeError):
        loader.load("b.py")
    loader.load("c.py")

    assert loader.calls == ["a.py", "b.py", "c.py"]


def test_namespace_loader_does_not_leak_future_flags(tmp_path):
    script = _write(
        tmp_path / "annotated.py",
        "def f(x: int) -> int:\n    return x\n\nANN = f.__annotations__\n",
    )
    loader = NamespaceLoader()

    errors = import_scripts([str(script)], loader=loader, settings=Settings())

    assert errors == []
    assert loader.namespace["ANN"] == {"x": int, "return": int}


def test_module_loaders_do_not_replace_each_others_modules(tmp_path, module_package):
    first_script = _write(tmp_path / "one" / "task.py", "WHO = 'one'\n")
    second_script = _write(tmp_path / "two" / "task.py", "WHO = 'two'\n")
    first = ModuleLoader(package=module_package)
    second = ModuleLoader(package=module_package)

    first.load(str(first_script))
    second.load(str(second_script))

    name = f"{module_package}.task"
    assert sys.modules[name] is first.modules[name]
    assert sys.modules[name].WHO == "one"
    [(second_name, second_module)] = second.modules.items()
    assert second_name != name
    assert sys.modules[second_name] is second_module
    assert second_module.WHO == "two"


def test_module_loader_never_shadows_existing_modules(tmp_path):
    import batchimport.config

    script = _write(tmp_path / "config.py", "SHADOW = True\n")
    loader = ModuleLoader(package="batchimport")
    try:
        loader.load(str(script))
        assert sys.modules["batchimport.config"] is batchimport.config
        assert "batchimport.config" not in loader.modules
    finally:
        for name in loader.modules:
            sys.modules.pop(name, None)
