from __future__ import annotations

import asyncio

from jobtracker.extension.agent import ButtonAction, ButtonState, ExtractionAgent, reconcile_button
from jobtracker.extension.extractor import JobDetails

URL = "https://www.linkedin.com/jobs/view/4188123456/"


def _page(title: str, company: str = "Example AG") -> str:
    return (
        f'<h1 class="job-details-jobs-unified-top-card__job-title">{title}</h1>'
        f'<div class="job-details-jobs-unified-top-card__company-name">{company}</div>'
    )


def _job(title: str | None) -> JobDetails:
    return JobDetails(title=title, company="Example AG", url=URL)


def test_reconcile_button_transitions():
    assert reconcile_button(None, None) is ButtonAction.NONE
    assert reconcile_button("Data Engineer", None) is ButtonAction.REMOVE
    assert reconcile_button("Data Engineer", _job(None)) is ButtonAction.REMOVE
    assert reconcile_button(None, _job("Data Engineer")) is ButtonAction.CREATE
    assert reconcile_button("Data Engineer", _job("Data Engineer")) is ButtonAction.NONE
    assert reconcile_button("Data Engineer", _job("ML Engineer")) is ButtonAction.REPLACE


def _agent(responses=None, sent=None, **kwargs) -> ExtractionAgent:
    async def send(message):
        if sent is not None:
            sent.append(message)
        return responses.pop(0) if responses else {"success": True}

    return ExtractionAgent(send_message=send, **kwargs)


def test_on_page_tracks_single_page_navigation():
    agent = _agent()

    assert agent.on_page(_page("Data Engineer"), URL) is ButtonAction.CREATE
    assert agent.button.title == "Data Engineer"
    assert agent.on_page(_page("Data Engineer"), URL) is ButtonAction.NONE

    next_url = "https://www.linkedin.com/jobs/view/4188000000/"
    assert agent.on_page(_page("ML Engineer"), next_url) is ButtonAction.REPLACE
    assert agent.button.title == "ML Engineer"

    assert agent.on_page("<div>Loading…</div>", next_url) is ButtonAction.REMOVE
    assert agent.button is None


def test_extract_job_message_returns_current_details():
    agent = _agent()
    assert agent.handle_message({"action": "extractJob"}) is None

    agent.on_page(_page("Data Engineer"), URL)
    payload = agent.handle_message({"action": "extractJob"})
    assert payload["title"] == "Data Engineer"
    assert payload["company"] == "Example AG"
    assert payload["url"] == URL
    assert agent.handle_message({"action": "somethingElse"}) is None


def test_click_save_sends_fresh_details_and_resets():
    sent = []
    agent = _agent(sent=sent, reset_seconds=0)
    agent.on_page(_page("Data Engineer"), URL)

    async def scenario():
        response = await agent.click_save()
        assert agent.button.state is ButtonState.SAVED
        await asyncio.sleep(0.01)
        return response

    response = asyncio.run(scenario())
    assert response == {"success": True}
    assert agent.button.state is ButtonState.IDLE
    assert sent == [{"action": "saveJob", "data": agent.button.job.to_payload()}]


def test_click_save_reports_error_state():
    agent = _agent(responses=[{"success": False, "error": "Please log in first", "requiresAuth": True}])
    agent.on_page(_page("Data Engineer"), URL)

    async def scenario():
        response = await agent.click_save()
        return response, agent.button.state

    response, state = asyncio.run(scenario())
    assert response["requiresAuth"] is True
    assert state is ButtonState.ERROR


def test_click_save_survives_relay_failure():
    async def send(message):
        raise ConnectionError("relay unavailable")

    agent = ExtractionAgent(send_message=send, reset_seconds=0)
    agent.on_page(_page("Data Engineer"), URL)

    response = asyncio.run(agent.click_save())
    assert response == {"success": False, "error": "relay unavailable"}


def test_click_save_without_button():
    agent = _agent()
    response = asyncio.run(agent.click_save())
    assert response["success"] is False


def test_visit_fetches_and_reconciles():
    async def fetcher(url):
        assert url == URL
        return _page("Data Engineer")

    agent = _agent(fetcher=fetcher)
    assert asyncio.run(agent.visit(URL)) is ButtonAction.CREATE
    assert agent.button.title == "Data Engineer"
