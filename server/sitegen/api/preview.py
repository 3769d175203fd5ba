# sitegen/api/preview.py
from fastapi import APIRouter, HTTPException, Request, Response
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import FileResponse

from sitegen.core.materializer import ProjectNotFoundError
from sitegen.utils.file_helpers import INDEX_FILE

router = APIRouter()


def _not_found(what: str) -> HTTPException:
    return HTTPException(status_code=404, detail=f"not found: {what}")


@router.get("/preview/{project_id}")
async def preview_index(project_id: str, request: Request):
    return await preview_file(project_id, INDEX_FILE, request)


@router.get("/preview/{project_id}/{filename}")
async def preview_file(project_id: str, filename: str, request: Request):
    """
    Serve one of the project's three files with its natural content type.
    Ids and filenames outside the allow-list are reported as missing.
    """
    store = request.app.state.project_store
    try:
        path = store.resolve_file(project_id, filename)
    except ProjectNotFoundError:
        raise _not_found(f"{project_id}/{filename}")
    return FileResponse(path)


@router.get("/download/{project_id}")
async def download(project_id: str, request: Request):
    store = request.app.state.project_store
    try:
        archive = await run_in_threadpool(store.build_archive, project_id)
    except ProjectNotFoundError:
        raise _not_found(project_id)
    return FileResponse(archive, media_type="application/zip", filename=f"{project_id}.zip")


@router.delete("/projects/{project_id}", status_code=204)
async def delete_project(project_id: str, request: Request):
    store = request.app.state.project_store
    try:
        await run_in_threadpool(store.delete, project_id)
    except ProjectNotFoundError:
        raise _not_found(project_id)
    return Response(status_code=204)
