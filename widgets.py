"""
Clients for the two public widgets that talk to outside services: the chat
assistant (an n8n-style webhook) and the contact form (a Formspree-style
endpoint). Neither touches the portfolio content.
"""

import json
import logging
import uuid

import httpx

from schemas import ContactForm

logger = logging.getLogger(__name__)

REPLY_KEYS = ("output", "reply", "message", "answer", "text")
CHAT_ACTION = "sendMessage"
CHAT_UNAVAILABLE = "Sorry, I am having trouble connecting. Please check your connection or try again later."


class WidgetError(Exception):
    pass


def extract_reply(raw: str) -> str:
    try:
        data = json.loads(raw)
    except ValueError:
        return raw

    # webhooks often wrap the answer in a one-element list
    if isinstance(data, list):
        data = data[0] if data else None

    if isinstance(data, dict):
        for key in REPLY_KEYS:
            if data.get(key):
                return str(data[key])
        return json.dumps(data)
    if isinstance(data, str):
        return data
    return raw


class ChatClient:
    def __init__(self, webhook_url: str, client: httpx.AsyncClient):
        self.webhook_url = webhook_url
        self.client = client
        self.session_id = uuid.uuid4().hex

    async def send(self, text: str) -> str:
        payload = {"sessionId": self.session_id, "action": CHAT_ACTION, "chatInput": text.strip()}
        try:
            response = await self.client.post(self.webhook_url, json=payload)
        except httpx.HTTPError as e:
            raise WidgetError(f"Chat webhook unreachable: {e}") from e
        if not response.is_success:
            raise WidgetError(f"Chat webhook failed with status: {response.status_code}")
        return extract_reply(response.text)


class ContactClient:
    def __init__(self, endpoint_url: str, client: httpx.AsyncClient):
        self.endpoint_url = endpoint_url
        self.client = client

    async def submit(self, form: ContactForm) -> bool:
        try:
            response = await self.client.post(
                self.endpoint_url,
                json=form.model_dump(),
                headers={"Accept": "application/json"},
            )
        except httpx.HTTPError as e:
            logger.error("Form submission error: %s", e)
            return False
        if not response.is_success:
            logger.warning("Form submission rejected with status %s", response.status_code)
        return response.is_success
