"""렌더링 계층 이벤트 스크립트 재생."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import jsonschema

from user_form.form import FormModel
from user_form.models import Accepted, Rejected

LOGGER = logging.getLogger("user_form.events")

EVENT_SCRIPT_SCHEMA: Dict[str, Any] = {
    "type": "array",
    "items": {
        "type": "object",
        "required": ["type"],
        "oneOf": [
            {
                "properties": {
                    "type": {"const": "set"},
                    "path": {"type": "string"},
                    "value": {},
                },
                "required": ["path", "value"],
            },
            {
                "properties": {
                    "type": {"const": "touch"},
                    "path": {"type": "string"},
                },
                "required": ["path"],
            },
            {"properties": {"type": {"const": "add_social_profile"}}},
            {
                "properties": {
                    "type": {"const": "remove_social_profile"},
                    "index": {"type": "integer"},
                },
                "required": ["index"],
            },
            {
                "properties": {
                    "type": {"const": "toggle_education"},
                    "level": {"type": "string"},
                    "selected": {"type": "boolean"},
                },
                "required": ["level", "selected"],
            },
            {"properties": {"type": {"const": "submit"}}},
        ],
    },
}


class EventScriptError(ValueError):
    """이벤트 스크립트 형식 오류."""


def load_event_script(path: Union[str, Path]) -> List[Dict[str, Any]]:
    """JSON 이벤트 스크립트를 읽고 형식을 검증합니다."""

    script_path = Path(path)
    try:
        events = json.loads(script_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise EventScriptError(f"Invalid JSON in {script_path}: {e.msg}") from e

    validate_event_script(events)
    return events


def validate_event_script(events: Any) -> None:
    try:
        jsonschema.validate(instance=events, schema=EVENT_SCRIPT_SCHEMA)
    except jsonschema.ValidationError as e:
        location = "/".join(str(part) for part in e.absolute_path) or "<root>"
        raise EventScriptError(f"Invalid event at {location}: {e.message}") from e


def replay_events(
    model: FormModel,
    events: List[Dict[str, Any]],
) -> Optional[Union[Accepted, Rejected]]:
    """이벤트를 순서대로 모델에 적용합니다.

    Returns:
        마지막 ``submit`` 이벤트의 결과. ``submit`` 이벤트가 없으면 ``None``.
    """

    validate_event_script(events)

    result: Optional[Union[Accepted, Rejected]] = None
    for position, event in enumerate(events):
        kind = event["type"]
        LOGGER.debug("이벤트 적용 | 순번=%d | 종류=%s", position, kind)

        if kind == "set":
            model.set_field(event["path"], event["value"])
        elif kind == "touch":
            model.touch(event["path"])
        elif kind == "add_social_profile":
            model.add_social_profile()
        elif kind == "remove_social_profile":
            model.remove_social_profile(event["index"])
        elif kind == "toggle_education":
            model.toggle_education(event["level"], event["selected"])
        elif kind == "submit":
            result = model.submit()

    return result
