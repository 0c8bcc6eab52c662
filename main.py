from typing import List, Optional

from fastapi import FastAPI, File, Form, HTTPException, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from slicer.batch import BatchItem, OUTPUT_FORMATS, run_batch
from slicer.config import ROOT_PATH, STATE_FILE
from slicer.errors import NoOutputDirectory
from slicer.output_dir import load_last_output_dir, resolve_output_dir, store_last_output_dir

import logging

logging.basicConfig(
    level=logging.INFO,  # or DEBUG if you want more details
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger(__name__)

app = FastAPI(root_path=ROOT_PATH)

# Allow the upload page to call this API from another origin
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


class ItemResult(BaseModel):
    name: str
    status: str
    error: Optional[str] = None
    output_paths: List[str] = []
    page_count: int = 0


class ConvertResponse(BaseModel):
    output_dir: str
    succeeded: int
    failed: int
    documents: List[str]
    items: List[ItemResult]


@app.get("/output_dir/")
def get_output_dir():
    return {"output_dir": load_last_output_dir(STATE_FILE)}


@app.post("/convert/", response_model=ConvertResponse)
def convert(
    files: List[UploadFile] = File(...),
    output_dir: str = Form(""),
    output_format: str = Form("pdf"),
):
    if output_format not in OUTPUT_FORMATS:
        raise HTTPException(status_code=400, detail=f"Unknown output format: {output_format}")

    try:
        resolved = resolve_output_dir(output_dir or load_last_output_dir(STATE_FILE))
    except NoOutputDirectory as e:
        raise HTTPException(status_code=400, detail={"error": e.kind.value, "message": str(e)})
    store_last_output_dir(resolved, STATE_FILE)

    items = []
    for upload in files:
        content_type = upload.content_type
        if content_type == "application/octet-stream":
            content_type = None
        items.append(BatchItem(name=upload.filename, source=upload.file.read(), content_type=content_type))

    result = run_batch(items, resolved, output_format=output_format)
    return ConvertResponse(
        output_dir=resolved,
        items=[ItemResult(**item.to_dict()) for item in result.items],
        **result.summary(),
    )
