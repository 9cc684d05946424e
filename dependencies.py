"""FastAPI providers that bind the stores to the request's database session."""
from typing import Annotated

from fastapi import Depends

from database import db_dependency
from post_store import PostStore
from user_directory import UserDirectory


def get_user_directory(db: db_dependency) -> UserDirectory:
    return UserDirectory(db)


def get_post_store(db: db_dependency) -> PostStore:
    return PostStore(db)


UsersDep = Annotated[UserDirectory, Depends(get_user_directory)]
PostsDep = Annotated[PostStore, Depends(get_post_store)]
