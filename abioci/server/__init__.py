import logging
from typing import Annotated

from fastapi import FastAPI, File, Form, HTTPException, Response, UploadFile
from pydantic import ValidationError

import abioci
from abioci.oci import ARTIFACT_KINDS, BuildError, Descriptor, Payload, Strategy
from abioci.oci.defaults import MANIFEST_MEDIA_TYPE

app = FastAPI()
logger = logging.getLogger(__name__)


@app.post("/manifests/{strategy}", name="build")
async def build_manifest(
    strategy: Strategy,
    files: Annotated[list[UploadFile], File()],
    kind: Annotated[str, Form()] = "abi",
    artifact_type: Annotated[str | None, Form()] = None,
    base: Annotated[Strategy, Form()] = Strategy.SINGLE_LAYER,
    subject_digest: Annotated[str | None, Form()] = None,
    subject_size: Annotated[int | None, Form()] = None,
    subject_media_type: Annotated[str, Form()] = MANIFEST_MEDIA_TYPE,
):
    if kind not in ARTIFACT_KINDS:
        raise HTTPException(status_code=400, detail=f"Unknown artifact kind '{kind}'")

    subject = None
    if subject_digest is not None or subject_size is not None:
        try:
            subject = Descriptor(
                mediaType=subject_media_type, digest=subject_digest, size=subject_size
            )
        except ValidationError as e:
            raise HTTPException(status_code=400, detail=f"Invalid subject: {e}")

    payloads = [Payload(name=f.filename or "", data=await f.read()) for f in files]
    logger.info("Building manifest for %d uploaded file(s)", len(payloads))
    try:
        manifest = abioci.oci.build(
            strategy,
            payloads,
            media_types=ARTIFACT_KINDS[kind],
            artifact_type=artifact_type,
            subject=subject,
            base=base,
        )
    except BuildError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return Response(content=manifest.json(), media_type=manifest.mediaType)
