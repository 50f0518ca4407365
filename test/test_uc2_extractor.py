from extraction.task_extractor import EXTRACTION_SYSTEM_PROMPT
from llm.schemas import NO_DUE_DATE, UNASSIGNED


def test_uc2_call_client_rajeev(extractor_factory):
    extractor = extractor_factory(
        '{"taskName":"Call client","assignee":"Rajeev","dueDate":"5:00 PM, Tomorrow","priority":"P3"}'
    )
    result = extractor.extract("Call client Rajeev tomorrow 5pm")
    assert result.task_name == "Call client"
    assert result.assignee == "Rajeev"
    assert result.due_date == "5:00 PM, Tomorrow"
    assert result.priority == "P3"


def test_uc2_prompt_states_defaults(extractor_factory):
    extractor = extractor_factory('{"taskName":"X"}')
    extractor.extract("X")
    system = extractor.llm.provider.calls[0]["system"]
    assert system == EXTRACTION_SYSTEM_PROMPT
    for field in ("taskName", "assignee", "dueDate", "priority"):
        assert field in system
    assert UNASSIGNED in system
    assert NO_DUE_DATE in system
    assert "P3" in system


def test_uc2_passes_raw_text_as_user_message(extractor_factory):
    extractor = extractor_factory('{"taskName":"Review documents","priority":"P1"}')
    extractor.extract("Review P1 documents Sarah by Friday")
    assert extractor.llm.provider.calls[0]["user"] == "Review P1 documents Sarah by Friday"
