
from fastapi import APIRouter, Depends
from docflow.auth.deps import get_auth_service, get_current_identity
from docflow.auth.service import AuthService
from docflow.schemas.auth import SignUpIn, LoginIn, LoginOut, UserOut, UserUpdate
from docflow.utils.security import Identity


def signup(body: SignUpIn, auth: AuthService = Depends(get_auth_service)):
    return auth.sign_up(body.email, body.username, body.password, body.role)

def login(body: LoginIn, auth: AuthService = Depends(get_auth_service)):
    token, user = auth.login(body.email, body.password)
    return LoginOut(token=token, user=UserOut.model_validate(user))

def me(identity: Identity = Depends(get_current_identity), auth: AuthService = Depends(get_auth_service)):
    return auth.users.get(identity.id)

def list_users(identity: Identity = Depends(get_current_identity), auth: AuthService = Depends(get_auth_service)):
    return auth.list_users()

def update_user(
    user_id: int,
    body: UserUpdate,
    identity: Identity = Depends(get_current_identity),
    auth: AuthService = Depends(get_auth_service),
):
    return auth.update_user(identity, user_id, body.model_dump(exclude_unset=True))


ROUTES = [
    ("POST", "/signup", signup, {"response_model": UserOut}),
    ("POST", "/login", login, {"response_model": LoginOut}),
    ("GET", "/me", me, {"response_model": UserOut}),
    ("GET", "", list_users, {"response_model": list[UserOut]}),
    ("PATCH", "/{user_id}", update_user, {"response_model": UserOut}),
]

router = APIRouter(prefix="/users", tags=["users"])
for method, path, endpoint, options in ROUTES:
    router.add_api_route(path, endpoint, methods=[method], **options)
