import json

import verify
from islready.readiness.checker import ReadinessReport
from islready.readiness.probes import ProbeResult


class StubChecker:
    last_config = None

    def __init__(self, cfg, passed=True):
        StubChecker.last_config = cfg
        self.passed = passed

    def verify(self):
        return ReadinessReport(results=(
            ProbeResult("model_artifact", self.passed, "ok" if self.passed else "model file not found (status: 404)"),
        ))


def test_main_success_and_overrides(monkeypatch, capsys):
    monkeypatch.setattr(verify, "ReadinessChecker", StubChecker)
    assert verify.main(["--model-url", "/tmp/isl_model.onnx", "--camera", "1", "--json"]) == 0
    assert StubChecker.last_config.model_url == "/tmp/isl_model.onnx"
    assert StubChecker.last_config.camera_index == 1
    assert json.loads(capsys.readouterr().out)["ok"] is True


def test_main_failure_exit_code(monkeypatch):
    monkeypatch.setattr(verify, "ReadinessChecker", lambda cfg: StubChecker(cfg, passed=False))
    assert verify.main([]) == 1


def test_main_bad_config(tmp_path):
    assert verify.main(["--config", str(tmp_path / "missing.yaml")]) == 2
