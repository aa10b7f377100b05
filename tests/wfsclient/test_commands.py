from io import StringIO

import orjson
import pytest
from django.core.management import CommandError, call_command

from tests.utils import capabilities_xml, read_file, requested_versions

URL = "https://example.com/wfs"


def test_wfscapabilities(http_responses):
    http_responses.bodies = [read_file("wfs200_capabilities.xml")] * 2
    stdout = StringIO()
    call_command("wfscapabilities", URL, stdout=stdout)

    data = orjson.loads(stdout.getvalue())
    assert data["service"]["title"] == "Places of Amsterdam"
    assert len(data["featureTypes"]) == 2


def test_wfscapabilities_feature_types(http_responses):
    http_responses.bodies = [read_file("wfs100_capabilities.xml")]
    stdout = StringIO()
    call_command("wfscapabilities", URL, "--wfs-version=1.0.0", "--feature-types", stdout=stdout)

    data = orjson.loads(stdout.getvalue())
    assert [ft["name"] for ft in data] == ["app:restaurant", "app:park"]
    assert requested_versions(http_responses) == ["1.0.0"]


def test_wfscapabilities_error(http_responses):
    http_responses.bodies = [capabilities_xml("3.0.0")]
    with pytest.raises(CommandError, match="Version negotiation has failed"):
        call_command("wfscapabilities", URL, stdout=StringIO())


@pytest.mark.parametrize("args,timeout", [([], 10), (["--timeout=2.5"], 2.5)])
def test_wfscapabilities_timeout(http_responses, args, timeout):
    http_responses.bodies = [read_file("wfs100_capabilities.xml")]
    call_command("wfscapabilities", URL, "--wfs-version=1.0.0", *args, stdout=StringIO())

    assert http_responses.call_args.kwargs["timeout"] == timeout
