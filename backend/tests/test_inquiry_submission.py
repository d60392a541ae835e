import json

import httpx
import pytest

from hire_api.pricing import DEFAULT_CATALOG
from hire_api.services.inquiry_submission import FAILURE_MESSAGE, SUCCESS_MESSAGE, InquiryFlow

ENDPOINT = 'http://api.test/api/v1/inquiries'

COMPLETE_FORM = {
    'project_type': 'personal',
    'project_goal': 'Show my photography',
    'selected_features': ['gallery'],
    'timeline': 'normal',
    'name': 'Grace Hopper',
    'email': 'grace@example.com',
    'message': 'Would love a portfolio site.',
}


def make_client(handler):
    return httpx.Client(transport=httpx.MockTransport(handler))


def test_wizard_navigation_blocks_incomplete_steps():
    flow = InquiryFlow(catalog=DEFAULT_CATALOG, endpoint=ENDPOINT)
    assert flow.step == 1
    assert flow.next_step() == {'project_type': 'required', 'project_goal': 'required'}
    assert flow.step == 1

    flow.update(project_type='business', project_goal='More leads')
    assert flow.next_step() == {}
    assert flow.step == 2
    assert flow.next_step() == {}
    assert flow.step == 3
    assert flow.next_step() == {'timeline': 'required'}

    flow.update(timeline='flexible')
    flow.next_step()
    assert flow.is_last_step
    assert flow.next_step() == {'name': 'required', 'email': 'required', 'message': 'required'}
    assert flow.step == 4

    flow.previous_step()
    assert flow.step == 3


def test_step_bounds_and_unknown_fields():
    flow = InquiryFlow(catalog=DEFAULT_CATALOG, endpoint=ENDPOINT)
    with pytest.raises(ValueError):
        flow.validate_step(5)
    with pytest.raises(ValueError):
        flow.update(favourite_colour='blue')
    flow.previous_step()
    assert flow.step == 1


def test_toggles_update_live_estimate():
    flow = InquiryFlow(catalog=DEFAULT_CATALOG, endpoint=ENDPOINT, project_type='personal', timeline='normal')
    assert flow.estimate().as_dict() == {'min': 300, 'max': 600}

    assert flow.toggle_feature('blog') is True
    assert flow.toggle_service('hosting') is True
    assert flow.estimate().as_dict() == {'min': 520, 'max': 820}
    assert [line.item for line in flow.breakdown()] == ['Personal Website', 'Blog/News Section', 'Hosting Setup']

    assert flow.toggle_feature('blog') is False
    assert flow.estimate().as_dict() == {'min': 420, 'max': 720}


def test_build_payload_merges_estimate():
    flow = InquiryFlow(catalog=DEFAULT_CATALOG, endpoint=ENDPOINT, **COMPLETE_FORM)
    payload = flow.build_payload()
    assert payload['projectType'] == 'personal'
    assert payload['selectedFeatures'] == ['gallery']
    assert payload['email'] == 'grace@example.com'
    assert (payload['estimateMin'], payload['estimateMax']) == (380, 680)
    assert payload['breakdown'][1] == {'item': 'Image Gallery', 'price': '£80', 'included_in_total': True}


def test_submit_success():
    seen = []

    def handler(request):
        seen.append(json.loads(request.content))
        return httpx.Response(201, json={'id': 7})

    flow = InquiryFlow(catalog=DEFAULT_CATALOG, endpoint=ENDPOINT, client=make_client(handler), **COMPLETE_FORM)
    result = flow.submit()
    assert result.ok is True
    assert result.message == SUCCESS_MESSAGE
    assert result.inquiry_id == 7
    assert seen[0]['estimateMin'] == 380


def test_submit_server_error_is_not_retried():
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(500, json={'detail': 'boom'})

    flow = InquiryFlow(catalog=DEFAULT_CATALOG, endpoint=ENDPOINT, client=make_client(handler), **COMPLETE_FORM)
    result = flow.submit()
    assert result.ok is False
    assert result.message == FAILURE_MESSAGE
    assert len(calls) == 1


def test_submit_network_error():
    def handler(request):
        raise httpx.ConnectError('connection refused', request=request)

    flow = InquiryFlow(catalog=DEFAULT_CATALOG, endpoint=ENDPOINT, client=make_client(handler), **COMPLETE_FORM)
    result = flow.submit()
    assert result.ok is False
    assert result.message == FAILURE_MESSAGE
    assert result.inquiry_id is None


def test_submit_incomplete_form_makes_no_request():
    def handler(request):
        raise AssertionError('should not be called')

    form = dict(COMPLETE_FORM, email='grace')
    flow = InquiryFlow(catalog=DEFAULT_CATALOG, endpoint=ENDPOINT, client=make_client(handler), **form)
    result = flow.submit()
    assert result.ok is False
    assert result.field_errors == {'email': 'invalid_email'}


def test_submit_non_json_body_still_succeeds():
    flow = InquiryFlow(
        catalog=DEFAULT_CATALOG,
        endpoint=ENDPOINT,
        client=make_client(lambda request: httpx.Response(204)),
        **COMPLETE_FORM,
    )
    result = flow.submit()
    assert result.ok is True
    assert result.inquiry_id is None


def test_submit_against_inquiry_api(client):
    flow = InquiryFlow(catalog=DEFAULT_CATALOG, endpoint='/api/v1/inquiries', client=client, **COMPLETE_FORM)
    flow.update(timeline='rush')
    result = flow.submit()
    assert result.ok is True
    assert result.inquiry_id is not None

    res = client.get(f'/api/v1/inquiries/{result.inquiry_id}', headers={'X-Admin-Token': 'test-admin'})
    stored = res.json()
    expected = flow.estimate()
    assert (stored['estimate_min'], stored['estimate_max']) == (expected.min, expected.max)
    assert stored['breakdown'] == [line.as_dict() for line in flow.breakdown()]
