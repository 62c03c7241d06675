from pydantic import BaseModel


class InviteRequest(BaseModel):
    sender_name: str = ""
    sender_email: str
    recipient_email: str
    title: str = ""
    datetime: str
    meeting_link: str = ""
    message: str = ""
