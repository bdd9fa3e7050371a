from islready.readiness.registry import ModuleRegistry, StaticRegistry


def test_module_registry_resolves_importable_module():
    cap = ModuleRegistry().lookup("json")
    assert cap.present
    assert cap.handle.__name__ == "json"


def test_module_registry_reports_missing_module():
    reg = ModuleRegistry()
    cap = reg.lookup("islready_no_such_runtime")
    assert not cap.present
    assert "islready_no_such_runtime" in cap.reason
    assert reg.lookup("islready_no_such_runtime") is cap  # cached


def test_static_registry():
    handle = object()
    reg = StaticRegistry({"onnxruntime": handle})
    assert reg.lookup("onnxruntime").handle is handle
    assert not reg.lookup("mediapipe").present
