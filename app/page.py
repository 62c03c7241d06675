from html import escape

from app.ui import FIELD_IDS, InvitePage, error_id

# (name, label, input type, required)
FIELDS = [
    ("sender_name", "Your name", "text", False),
    ("sender_email", "Your email", "email", True),
    ("recipient_email", "Recipient email", "email", True),
    ("title", "Meeting title", "text", False),
    ("datetime", "Date and time", "datetime-local", True),
    ("meeting_link", "Meeting link", "url", False),
    ("message", "Message", "textarea", False),
]


def _attr(value: str) -> str:
    return escape(value, quote=True)


def render_field(page: InvitePage, name: str, label: str, kind: str, required: bool) -> str:
    el_id = FIELD_IDS[name]
    value = page.read_field(name) or ""
    star = ' <span class="required">*</span>' if required else ""

    if kind == "textarea":
        control = f'<textarea id="{el_id}" name="{name}" rows="4">{escape(value)}</textarea>'
    else:
        extra = f' min="{_attr(page.min_datetime)}"' if kind == "datetime-local" else ""
        control = f'<input id="{el_id}" name="{name}" type="{kind}" value="{_attr(value)}"{extra}>'

    error = page.errors.get(name, "")
    hidden = "" if error else " hidden"
    return (
        f'<div class="field">'
        f'<label for="{el_id}">{label}{star}</label>'
        f"{control}"
        f'<p id="{error_id(name)}" class="error{hidden}">{escape(error)}</p>'
        f"</div>"
    )


def render_status(page: InvitePage) -> str:
    if page.status is None:
        return '<div id="statusMessage" class="hidden"></div>'
    tone = "success" if page.status.is_success else "failure"
    return f'<div id="statusMessage"><div class="banner {tone}">{escape(page.status.message)}</div></div>'


def render_page(page: InvitePage) -> str:
    fields = "\n".join(render_field(page, *spec) for spec in FIELDS)
    disabled = "" if page.button_enabled else " disabled"
    return f"""
    <!DOCTYPE html>
    <html>
    <head>
        <meta charset="utf-8">
        <title>Send a Meeting Invite</title>
        <style>
            body {{
                font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif;
                background: #f9fafb;
                margin: 0;
            }}
            .container {{
                max-width: 560px;
                margin: 40px auto;
                background: white;
                padding: 32px;
                border-radius: 12px;
                box-shadow: 0 4px 20px rgba(0,0,0,0.08);
            }}
            .field {{ margin-bottom: 16px; }}
            label {{ display: block; font-weight: 600; margin-bottom: 4px; }}
            input, textarea {{ width: 100%; padding: 8px; box-sizing: border-box; }}
            .required {{ color: #ef4444; }}
            .error {{ color: #ef4444; font-size: 14px; margin: 4px 0 0; }}
            .hidden {{ display: none; }}
            .banner {{ padding: 12px; border-radius: 6px; margin-bottom: 16px; }}
            .banner.success {{ background: #f0fdf4; border: 1px solid #bbf7d0; color: #15803d; }}
            .banner.failure {{ background: #fef2f2; border: 1px solid #fecaca; color: #b91c1c; }}
        </style>
    </head>
    <body>
        <div class="container">
            <h1>Send a Meeting Invite</h1>
            {render_status(page)}
            <form id="inviteForm" method="post" action="/" novalidate>
            {fields}
            <button id="submitBtn" type="submit"{disabled}>{escape(page.button_label)}</button>
            </form>
        </div>
    </body>
    </html>
    """
