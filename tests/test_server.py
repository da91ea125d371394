
import pytest
import uvicorn.config
from fastapi.testclient import TestClient

from abioci.oci import Descriptor
from abioci.oci.defaults import ANNOTATION_TITLE, EMPTY_DIGEST
from abioci.server import app
from abioci.server.logs import logging_config

SUBJECT_DIGEST = "sha256:" + "1" * 64


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def files(testdata):
    return [
        ("files", (path.name, path.read_bytes(), "application/json"))
        for path in sorted((testdata / "contracts").glob("*.abi"))
    ]


@pytest.mark.parametrize("strategy", ["A", "B", "C"])
def test_build(client, files, strategy):
    response = client.post(f"/manifests/{strategy}", files=files)

    assert response.status_code == 200, response.text
    assert response.headers["content-type"].startswith(
        "application/vnd.oci.image.manifest.v1+json"
    )
    document = response.json()
    assert document["schemaVersion"] == 2
    assert document["artifactType"] == "application/vnd.solidity.abi"
    assert "subject" not in document


def test_build_per_item(client, files):
    document = client.post("/manifests/C", files=files).json()

    assert document["config"]["digest"] == EMPTY_DIGEST
    assert [layer["annotations"][ANNOTATION_TITLE] for layer in document["layers"]] == [
        "Ownable.abi",
        "Token.abi",
    ]
    for (_, (_, data, _)), layer in zip(files, document["layers"]):
        Descriptor.model_validate(layer).verify(data)


def test_build_subject(client, files):
    response = client.post(
        "/manifests/D",
        files=files,
        data={"subject_digest": SUBJECT_DIGEST, "subject_size": "9999", "base": "B"},
    )

    assert response.status_code == 200, response.text
    document = response.json()
    assert document["subject"]["digest"] == SUBJECT_DIGEST
    assert document["layers"] == []


def test_build_subject_missing(client, files):
    response = client.post("/manifests/D", files=files)
    assert response.status_code == 400
    assert response.json()["detail"] == "Strategy D requires a subject"


def test_build_subject_invalid(client, files):
    response = client.post(
        "/manifests/D",
        files=files,
        data={"subject_digest": "nope", "subject_size": "1"},
    )
    assert response.status_code == 400


def test_build_invalid_strategy(client, files):
    response = client.post("/manifests/E", files=files)
    assert response.status_code == 422


def test_build_unknown_kind(client, files):
    response = client.post("/manifests/A", files=files, data={"kind": "wheels"})
    assert response.status_code == 400


def test_build_submodule_kind(client, files):
    document = client.post(
        "/manifests/C", files=files, data={"kind": "submodules"}
    ).json()
    assert document["artifactType"] == "application/vnd.example.git-submodules"


def test_build_subject_with_other_strategy(client, files):
    response = client.post(
        "/manifests/C",
        files=files,
        data={"subject_digest": SUBJECT_DIGEST, "subject_size": "9999"},
    )
    assert response.status_code == 400
    assert "does not take a subject" in response.json()["detail"]


@pytest.mark.parametrize("level", ["INFO", "DEBUG"])
def test_logging_config(level):
    config = logging_config(level)

    assert config["loggers"]["abioci"] == {
        "handlers": ["default"],
        "level": level,
        "propagate": False,
    }
    assert "default" in config["handlers"]
    assert "abioci" not in uvicorn.config.LOGGING_CONFIG["loggers"]
