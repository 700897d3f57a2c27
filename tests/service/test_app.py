"""Tests for the FastAPI service mode."""

from __future__ import annotations

from pathlib import Path

import pytest

try:
    from fastapi.testclient import TestClient
except ModuleNotFoundError:  # pragma: no cover - optional dependency
    pytest.skip("fastapi not installed", allow_module_level=True)

from codeprose.models import DescribeResult
from codeprose.orchestrator import Orchestrator
from codeprose.service import create_app

from tests._fixtures.project_builder import ProjectBuilder
from tests._fixtures.samples import FOO_SOURCE, foo_tree
from tests._fixtures.stubs import StubParser


class _StubOrchestrator(Orchestrator):
    def __init__(self) -> None:
        super().__init__(parser=StubParser(foo_tree))
        self.describe_calls: list[dict[str, object]] = []

    def describe(self, path, *, project_root=None) -> DescribeResult:
        self.describe_calls.append({"path": str(path), "project_root": project_root})
        if str(path).endswith("broken.ts"):
            raise RuntimeError("No grammar available")
        return DescribeResult(text="Foo is small.", truncated=False)


@pytest.fixture
def orchestrator() -> _StubOrchestrator:
    return _StubOrchestrator()


@pytest.fixture
def client(orchestrator: _StubOrchestrator) -> TestClient:
    return TestClient(create_app(lambda: orchestrator))


@pytest.fixture
def foo_path(project_builder: ProjectBuilder) -> str:
    project_builder.write({"foo.ts": FOO_SOURCE})
    return str(project_builder.path("foo.ts"))


def test_health_endpoint(client: TestClient) -> None:
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_outline_endpoint(client: TestClient, foo_path: str) -> None:
    response = client.post("/outline", json={"path": foo_path})

    assert response.status_code == 200
    payload = response.json()
    assert payload["entries"] == 3
    assert payload["outline"].startswith("imports (lines 1-1)")


def test_annotate_endpoint(client: TestClient, foo_path: str) -> None:
    response = client.post("/annotate", json={"path": foo_path})

    assert response.status_code == 200
    payload = response.json()
    assert payload["file_summary"].startswith("This file defines 1 function (foo)")
    assert payload["nodes"][1]["summary"].startswith("Foo is an async function")


def test_describe_endpoint(client: TestClient, orchestrator: _StubOrchestrator, tmp_path: Path) -> None:
    response = client.post("/describe", json={"path": "foo.ts", "project_root": str(tmp_path)})

    assert response.status_code == 200
    assert response.json() == {"text": "Foo is small.", "error": None, "truncated": False}
    assert orchestrator.describe_calls == [{"path": "foo.ts", "project_root": str(tmp_path)}]


def test_missing_file_maps_to_404(client: TestClient, tmp_path: Path) -> None:
    response = client.post("/outline", json={"path": str(tmp_path / "absent.ts")})

    assert response.status_code == 404
    assert "Source file not found" in response.json()["detail"]


def test_runtime_error_maps_to_400(client: TestClient) -> None:
    response = client.post("/describe", json={"path": "broken.ts"})

    assert response.status_code == 400
    assert response.json() == {"detail": "No grammar available"}
