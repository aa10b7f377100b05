from unittest import mock

import pytest
import requests

from tests.utils import make_response


@pytest.fixture()
def http_responses():
    """Replace the HTTP layer by scripted responses.

    Assign a list of response bodies (or exceptions) to ``.side_effect``,
    the calls are recorded in ``.call_args_list``.
    """

    def _to_response(item):
        if isinstance(item, BaseException):
            raise item
        elif isinstance(item, requests.Response):
            return item
        return make_response(item)

    with mock.patch.object(requests.Session, "get", autospec=True) as mock_get:
        mock_get.bodies = []
        mock_get.side_effect = lambda session, url, **kwargs: _to_response(
            mock_get.bodies.pop(0)
        )
        yield mock_get