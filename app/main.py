import os, logging
from fastapi import Depends, FastAPI, Request
from fastapi.responses import HTMLResponse
from dotenv import load_dotenv

from app.invite_client import InviteClient
from app.invite_form import InviteFormController, SubmitEvent
from app.page import render_page
from app.ui import InvitePage

load_dotenv()

INVITE_API_BASE = os.getenv("INVITE_API_BASE", "http://localhost:8080")
INVITE_API_TIMEOUT = float(os.getenv("INVITE_API_TIMEOUT")) if os.getenv("INVITE_API_TIMEOUT") else None
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

logging.basicConfig(
    level=LOG_LEVEL.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI()


def get_invite_client() -> InviteClient:
    return InviteClient(INVITE_API_BASE, timeout=INVITE_API_TIMEOUT)


@app.get("/health")
async def health(client: InviteClient = Depends(get_invite_client)):
    reachable = await client.ping()
    return {"ok": True, "invite_api": client.base_url, "invite_api_reachable": reachable}


@app.get("/", response_class=HTMLResponse)
async def invite_page():
    return HTMLResponse(content=render_page(InvitePage()))


@app.post("/", response_class=HTMLResponse)
async def submit_invite(request: Request, client: InviteClient = Depends(get_invite_client)):
    form = await request.form()
    values = {k: v for k, v in form.items() if isinstance(v, str)}

    page = InvitePage.from_form(values)
    controller = InviteFormController(page, client)
    await controller.submit(SubmitEvent(values))
    return HTMLResponse(content=render_page(page))
