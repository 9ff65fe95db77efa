"""Shared fixtures for tpology tests.

``sample_resources`` is a plausible inventory: two providers, four clusters
that reference them, two environments that reference the clusters, and two
applications deployed to both environments.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from tpology.inventory.inventory import Inventory
from tpology.resource.model import Resource


def make_sample_resources() -> list[Resource]:
    providers = [
        Resource("provider", "gcp", "Google Cloud Platform", "gcp-team", {"type": "gcp", "account": "gcp-account"}),
        Resource("provider", "aws", "Amazon Web Services", "aws-team", {"type": "aws", "account": "aws-account"}),
    ]
    clusters = [
        Resource(
            "cluster",
            f"{provider}-{env}",
            f"{provider} {env} cluster",
            f"{provider}-team",
            {"provider": provider, "project": f"{provider}-{env}-project", "region": region},
        )
        for provider, region in (("gcp", "us-east1"), ("aws", "us-east-1"))
        for env in ("dev", "prod")
    ]
    environments = [
        Resource(
            "environment",
            env,
            f"{env} environment",
            f"{env}-team",
            {
                "clusters": [
                    {"cluster": f"gcp-{env}", "namespace": env},
                    {"cluster": f"aws-{env}", "namespace": env},
                ]
            },
        )
        for env in ("dev", "prod")
    ]
    applications = [
        Resource(
            "application",
            app,
            f"Application {app}",
            f"{app}-team",
            {
                "git": {"repo": f"{app}-repo", "branch": f"{app}-branch", "path": f"{app}-path"},
                "deployments": [{"environment": "dev"}, {"environment": "prod"}],
            },
        )
        for app in ("app1", "app2")
    ]
    return providers + clusters + environments + applications


@pytest.fixture
def sample_resources() -> list[Resource]:
    return make_sample_resources()


@pytest.fixture
def sample_inventory(sample_resources: list[Resource]) -> Inventory:
    return Inventory(sample_resources)


SAMPLE_MANIFESTS: dict[str, str] = {
    "providers/providers.yaml": """\
name: gcp
description: Google Cloud Platform
owner: gcp-team
provider:
  type: gcp
---
name: aws
description: Amazon Web Services
owner: aws-team
provider:
  type: aws
""",
    "clusters/gcp-dev.yml": """\
name: gcp-dev
owner: gcp-team
cluster:
  provider: gcp
  project: gcp-dev-project
""",
    "environments/dev.YAML": """\
name: dev
environment:
  clusters:
    - cluster: gcp-dev
      namespace: dev
""",
    "README.md": "not a manifest\n",
}


@pytest.fixture
def write_manifests(tmp_path: Path) -> Callable[[dict[str, str]], Path]:
    """Return a function that writes ``{relative path: text}`` under tmp_path."""

    def _write(files: dict[str, str]) -> Path:
        for rel, text in files.items():
            p = tmp_path / rel
            p.parent.mkdir(parents=True, exist_ok=True)
            p.write_text(text, encoding="utf-8")
        return tmp_path

    return _write


@pytest.fixture
def manifest_dir(write_manifests: Callable[[dict[str, str]], Path]) -> Path:
    return write_manifests(SAMPLE_MANIFESTS)
