from fastapi import APIRouter, Depends, Path, Query, Request, Response, status
from sqlalchemy.orm import Session
from typing import Annotated, List, Optional
from user_api.core.database import get_db
from user_api.schemas.user import USER_ID_MAX, USER_ID_MIN, UserPayload, UserResponse
from user_api.services.user_service import user_service

router = APIRouter(prefix="/users", tags=["users"])

# Ids outside the INTEGER column range cannot exist and are rejected with 400
UserId = Annotated[int, Path(ge=USER_ID_MIN, le=USER_ID_MAX)]


@router.get("", response_model=List[UserResponse])
def list_users(
    first_name: Optional[str] = Query(None, alias="firstName"),
    last_name: Optional[str] = Query(None, alias="lastName"),
    email: Optional[str] = Query(None),
    db: Session = Depends(get_db)
):
    """List users, optionally filtered by substrings of first name, last name and email"""
    return user_service.list_users(db, first_name=first_name, last_name=last_name, email=email)


@router.get("/{user_id}", response_model=UserResponse)
def get_user(user_id: UserId, db: Session = Depends(get_db)):
    """Get a specific user"""
    return user_service.get_user(db, user_id)


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def create_user(
    payload: UserPayload,
    request: Request,
    response: Response,
    db: Session = Depends(get_db)
):
    """Create a user; the Location header points at the new record"""
    user = user_service.create_user(db, payload)
    response.headers["Location"] = str(request.url_for("get_user", user_id=user.id))
    return user


@router.put("", status_code=status.HTTP_204_NO_CONTENT)
def update_user(
    payload: UserPayload,
    user_id: int = Query(..., alias="id", ge=USER_ID_MIN, le=USER_ID_MAX),
    db: Session = Depends(get_db)
):
    """Replace a user identified by the ?id= query parameter"""
    user_service.update_user(db, user_id, payload)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.put("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def update_user_by_path(
    payload: UserPayload,
    user_id: UserId,
    db: Session = Depends(get_db)
):
    """Replace a user identified by the path"""
    user_service.update_user(db, user_id, payload)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(user_id: UserId, db: Session = Depends(get_db)):
    """Delete a user"""
    user_service.delete_user(db, user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
