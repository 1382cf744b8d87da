"""Sign-in / sign-out endpoints driving the session provider."""

from fastapi import APIRouter, Depends, Request, Response
from pydantic import BaseModel

from ideaflow.api.deps import get_sessions, get_store
from ideaflow.auth.identity import invalidate_token_cache, verify_access_token
from ideaflow.auth.session import Session, SessionProvider
from ideaflow.storage.errors import ErrorKind, StoreError
from ideaflow.storage.store import IdeaStore

router = APIRouter(prefix="/session", tags=["session"])


class SignInRequest(BaseModel):
    access_token: str = ""


class SessionResponse(BaseModel):
    user_id: str
    email: str | None = None
    state: str
    ideas: int


def _describe(session: Session, store: IdeaStore) -> SessionResponse:
    return SessionResponse(
        user_id=session.user_id,
        email=session.email,
        state=store.state.value,
        ideas=len(store.list()),
    )


@router.post("", response_model=SessionResponse)
async def sign_in(
    body: SignInRequest,
    request: Request,
    sessions: SessionProvider = Depends(get_sessions),
    store: IdeaStore = Depends(get_store),
) -> SessionResponse:
    """Start a session and load its ideas.

    In remote mode the access token is verified with the identity provider;
    in local mode the fixed local user is signed in.
    """
    settings = request.app.state.settings
    if settings.storage_backend == "local":
        session = Session(user_id=settings.local_user_id)
    else:
        session = await verify_access_token(body.access_token)
    await sessions.sign_in(session)
    return _describe(session, store)


@router.get("", response_model=SessionResponse)
async def current_session(
    sessions: SessionProvider = Depends(get_sessions),
    store: IdeaStore = Depends(get_store),
) -> SessionResponse:
    session = sessions.current
    if session is None:
        raise StoreError(ErrorKind.UNAUTHORIZED, "No active session")
    return _describe(session, store)


@router.delete("", status_code=204)
async def sign_out(sessions: SessionProvider = Depends(get_sessions)) -> Response:
    """End the session; the idea list becomes empty."""
    await sessions.sign_out()
    invalidate_token_cache()
    return Response(status_code=204)
