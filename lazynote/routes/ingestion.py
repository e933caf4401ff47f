from fastapi import APIRouter, Depends, HTTPException, status

from lazynote.domain.errors import NotFoundError, PreconditionError, ValidationError
from lazynote.models.user import User
from lazynote.routes.deps import get_current_user, get_ingestion_registry
from lazynote.schemas.ingestion import IngestionCreate, IngestionResponse
from lazynote.services.ingestion import IngestionRegistry, IngestionService

router = APIRouter(prefix="/ingestions", tags=["ingestion"])


def _service(
    registry: IngestionRegistry = Depends(get_ingestion_registry),
) -> IngestionService:
    return IngestionService(registry)


@router.post("", response_model=IngestionResponse, status_code=status.HTTP_201_CREATED)
async def create_ingestion(
    request: IngestionCreate,
    user: User = Depends(get_current_user),
    service: IngestionService = Depends(_service),
):
    """
    Upload documents and generate a flashcard set (simulated)

    The job moves through uploading and processing on a timer; poll
    GET /ingestions/{job_id} for progress. At least one file and a
    non-empty title are required.
    """
    try:
        return service.create(user.id, request)
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.post("/{job_id}/start", response_model=IngestionResponse)
async def restart_ingestion(
    job_id: str,
    request: IngestionCreate,
    user: User = Depends(get_current_user),
    service: IngestionService = Depends(_service),
):
    """Start an idle (reset) job again with new input"""
    try:
        return service.start(user.id, job_id, request)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except PreconditionError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))


@router.get("/{job_id}", response_model=IngestionResponse)
async def get_ingestion(
    job_id: str,
    user: User = Depends(get_current_user),
    service: IngestionService = Depends(_service),
):
    try:
        return service.get(user.id, job_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.post("/{job_id}/reset", response_model=IngestionResponse)
async def reset_ingestion(
    job_id: str,
    user: User = Depends(get_current_user),
    service: IngestionService = Depends(_service),
):
    """Cancel any pending progress and return the job to idle"""
    try:
        return service.reset(user.id, job_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.delete("/{job_id}", status_code=status.HTTP_204_NO_CONTENT)
async def discard_ingestion(
    job_id: str,
    user: User = Depends(get_current_user),
    service: IngestionService = Depends(_service),
):
    try:
        service.discard(user.id, job_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
