"""
Step definitions for the Route53 request pipeline tests.

The HTTP session is replaced with a Mock, so no traffic leaves the machine.
"""

from unittest.mock import Mock

from behave import given, then, when

from route53_records_manager.api.credentials import CredentialProvider, Credentials
from route53_records_manager.api.errors import RemoteError, UnsupportedResultError
from route53_records_manager.api.executor import RequestExecutor
from route53_records_manager.api.models import RRSet
from route53_records_manager.api.xml_codec import NAMESPACE
from route53_records_manager.providers.route53_provider import Route53Provider

CHANGE_ID = "/change/C2682N5HXP0BZ4"


def _response(status, body):
    response = Mock()
    response.status_code = status
    response.content = body.encode("utf-8")
    return response


def _accepted():
    return _response(
        200,
        f'<ChangeResourceRecordSetsResponse xmlns="{NAMESPACE}"><ChangeInfo>'
        f"<Id>{CHANGE_ID}</Id><Status>PENDING</Status>"
        "<SubmittedAt>2017-03-10T01:36:41.958Z</SubmittedAt>"
        "</ChangeInfo></ChangeResourceRecordSetsResponse>",
    )


def _error(status, code):
    return _response(
        status,
        f'<ErrorResponse xmlns="{NAMESPACE}"><Error><Type>Sender</Type>'
        f"<Code>{code}</Code><Message>{code} raised by test</Message></Error>"
        "<RequestId>feature-request</RequestId></ErrorResponse>",
    )


def _call(context, operation):
    context.error = None
    try:
        context.result = operation()
    except Exception as e:
        context.error = e
        context.result = None


@given('a Route53 provider with credentials "{old}" that rotate to "{new}"')
def step_impl(context, old, new):
    """Build a provider whose session and credential source are fakes."""
    context.source = Mock()
    context.source.fetch.side_effect = [
        Credentials(old, f"{old}-secret"),
        Credentials(new, f"{new}-secret", "rotated-token"),
    ]
    context.session = Mock()
    executor = RequestExecutor(CredentialProvider(context.source), session=context.session)
    context.route53 = Route53Provider({}, executor=executor)


@given('the API answers 403 "{code}" and then accepts the change')
def step_impl(context, code):
    context.session.request.side_effect = [_error(403, code), _accepted()]


@given('the API answers 403 "{first}" and then 403 "{second}"')
def step_impl(context, first, second):
    context.session.request.side_effect = [_error(403, first), _error(403, second)]


@given('the API rejects the change with {status:d} "{code}"')
def step_impl(context, status, code):
    context.session.request.side_effect = [_error(status, code)]


@given("the API accepts the change")
def step_impl(context):
    context.session.request.side_effect = [_accepted()]


@given("the API returns a truncated record set listing")
def step_impl(context):
    context.session.request.side_effect = [
        _response(
            200,
            f'<ListResourceRecordSetsResponse xmlns="{NAMESPACE}"><ResourceRecordSets/>'
            "<IsTruncated>true</IsTruncated><NextRecordName>m.test.bigbank.com.</NextRecordName>"
            "<NextRecordType>A</NextRecordType><MaxItems>1</MaxItems>"
            "</ListResourceRecordSetsResponse>",
        )
    ]


@when('I create "{name}" "{record_type}" with values "{values}"')
def step_impl(context, name, record_type, values):
    rrset = RRSet(name=name, type=record_type, values=values.split(","))
    _call(context, lambda: context.route53.create_rrset("Z0TESTBIGBANK", rrset))


@when('I upsert "{name}" "{record_type}" with values "{values}" weighted {weight:d} as "{identifier}"')
def step_impl(context, name, record_type, values, weight, identifier):
    rrset = RRSet(
        name=name,
        type=record_type,
        values=values.split(","),
        set_identifier=identifier,
        weight=weight,
    )
    _call(context, lambda: context.route53.upsert_rrset("Z0TESTBIGBANK", rrset))


@when("I list the record sets")
def step_impl(context):
    _call(context, lambda: context.route53.list_rrsets("/hostedzone/Z0TESTBIGBANK"))


@then('the change should be accepted with id "{change_id}"')
def step_impl(context, change_id):
    assert context.error is None, f"Unexpected error: {context.error}"
    assert context.result.id == change_id


@then('the call should fail with a remote error "{code}"')
def step_impl(context, code):
    assert isinstance(context.error, RemoteError), f"Got {context.error!r}"
    assert context.error.code == code


@then("the call should fail as unsupported")
def step_impl(context):
    assert isinstance(context.error, UnsupportedResultError), f"Got {context.error!r}"
    assert context.result is None


@then("{count:d} {noun} should have been sent")
def step_impl(context, count, noun):
    assert context.session.request.call_count == count


@then('the last request should be signed with "{access_key_id}"')
def step_impl(context, access_key_id):
    headers = context.session.request.call_args[1]["headers"]
    assert f"AWSAccessKeyId={access_key_id}," in headers["X-Amzn-Authorization"]


@then("credentials should have been fetched {count:d} times")
def step_impl(context, count):
    assert context.source.fetch.call_count == count


@then('the last request body should contain "{fragment}"')
def step_impl(context, fragment):
    body = context.session.request.call_args[1]["data"].decode("utf-8")
    assert fragment in body, body
