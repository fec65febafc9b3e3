"""Issue label endpoints."""

from fastapi import APIRouter

from hubsim.api.dependencies import StoreDep
from hubsim.api.models import LabelResponse, LabelsBody, labels_to_response

router = APIRouter(prefix="/repos/{owner}/{repo}/issues/{number:int}/labels", tags=["labels"])


@router.get("", response_model=list[LabelResponse])
def list_labels(number: int, store: StoreDep) -> list[LabelResponse]:
    """List labels on an issue."""
    return labels_to_response(store.get_labels(number))


@router.post("", response_model=list[LabelResponse])
def add_labels(number: int, body: LabelsBody, store: StoreDep) -> list[LabelResponse]:
    """Add labels to an issue; labels already present are kept once."""
    return labels_to_response(store.add_labels(number, body.labels))


@router.put("", response_model=list[LabelResponse])
def set_labels(number: int, body: LabelsBody, store: StoreDep) -> list[LabelResponse]:
    """Replace all labels on an issue."""
    return labels_to_response(store.set_labels(number, body.labels))


@router.delete("/{name:path}", response_model=list[LabelResponse])
def remove_label(number: int, name: str, store: StoreDep) -> list[LabelResponse]:
    """Remove one label from an issue; returns the remaining labels."""
    return labels_to_response(store.remove_label(number, name))
