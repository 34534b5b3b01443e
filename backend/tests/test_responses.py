import json

import pytest

from readytowork.api.responses import action_response
from readytowork.core.errors import ActionResult, ErrorCode


@pytest.mark.parametrize(
    "code, status_code",
    [
        (ErrorCode.NOT_AUTHENTICATED, 401),
        (ErrorCode.UNAUTHORIZED, 403),
        (ErrorCode.NOT_FOUND, 404),
        (ErrorCode.PLAN_NOT_FOUND, 404),
        (ErrorCode.EMAIL_EXISTS, 409),
        (ErrorCode.EMAIL_ALREADY_EXISTS, 409),
        (ErrorCode.INVALID_STATE, 409),
        (ErrorCode.INSUFFICIENT_CREDITS, 402),
        (ErrorCode.SYSTEM_ERROR, 500),
        (ErrorCode.INVALID_PASSWORD, 400),
        (ErrorCode.VALIDATION_ERROR, 400),
    ],
)
def test_error_codes_map_to_statuses(code, status_code):
    response = action_response(ActionResult.fail("nope", code))

    assert response.status_code == status_code
    assert json.loads(response.body) == {
        "success": False,
        "error": "nope",
        "errorCode": code.value,
        "data": None,
    }


def test_success_uses_given_status():
    response = action_response(ActionResult.ok({"id": 1}), success_status=201)

    assert response.status_code == 201
    assert json.loads(response.body)["data"] == {"id": 1}
