"""Resource catalog routes."""
import logging
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.database import get_db
from app.errors import Conflict
from app.models.resource import Resource
from app.schemas.venue import ResourceCreate, ResourceOut

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/", response_model=ResourceOut, status_code=status.HTTP_201_CREATED)
def create_resource(payload: ResourceCreate, db: Session = Depends(get_db)):
    if db.query(Resource).filter(Resource.name == payload.name).first():
        raise Conflict("Resource already exists")
    resource = Resource(**payload.model_dump())
    db.add(resource)
    db.commit()
    db.refresh(resource)
    logger.info("Created resource %s (%s)", resource.resource_id, resource.name)
    return resource


@router.get("/", response_model=list[ResourceOut])
def list_resources(available_only: bool = False, db: Session = Depends(get_db)):
    query = db.query(Resource)
    if available_only:
        query = query.filter(Resource.available.is_(True))
    return query.order_by(Resource.name).all()
