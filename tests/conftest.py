"""Shared fixtures: a real boto3 IAM client with its responses stubbed out."""

from datetime import datetime, timezone
from urllib.parse import quote

import pytest
from boto3.session import Session
from botocore.stub import Stubber

ACCOUNT_ID = '123456789012'
TRUST_POLICY_ENCODED = '%7B%22a%22%3A1%7D'


def encode_document(document: str) -> str:
    """URL-encode a policy document the way IAM returns it."""
    return quote(document, safe='')


def make_role(name='source-role', path='/svc/', **fields):
    role = {
        'Path': path,
        'RoleName': name,
        'RoleId': 'AROAEXAMPLEROLEID0001',
        'Arn': f'arn:aws:iam::{ACCOUNT_ID}:role{path}{name}',
        'CreateDate': datetime(2024, 1, 1, tzinfo=timezone.utc),
        'AssumeRolePolicyDocument': TRUST_POLICY_ENCODED,
        'MaxSessionDuration': 3600,
    }
    role.update(fields)
    return role


class IamStubs:
    """Queue IAM responses on a Stubber, one helper per operation."""

    def __init__(self, stubber):
        self.stubber = stubber

    def get_role(self, role):
        self.stubber.add_response('get_role', {'Role': role}, {'RoleName': role['RoleName']})

    def get_role_error(self, role_name, code='NoSuchEntity', status=404):
        self.stubber.add_client_error('get_role', service_error_code=code,
                                      service_message=f'The role with name {role_name} cannot be found.',
                                      http_status_code=status, expected_params={'RoleName': role_name})

    def list_role_policies(self, role_name, *pages):
        self._paged('list_role_policies', 'PolicyNames', role_name, pages)

    def list_attached_role_policies(self, role_name, *pages):
        self._paged('list_attached_role_policies', 'AttachedPolicies', role_name, pages)

    def get_role_policy(self, role_name, policy_name, document):
        self.stubber.add_response(
            'get_role_policy',
            {'RoleName': role_name, 'PolicyName': policy_name, 'PolicyDocument': document},
            {'RoleName': role_name, 'PolicyName': policy_name},
        )

    def create_role(self, expected_params):
        role = make_role(name=expected_params['RoleName'], path=expected_params.get('Path', '/'))
        self.stubber.add_response('create_role', {'Role': role}, expected_params)

    def create_role_error(self, expected_params, code='EntityAlreadyExists', status=409):
        self.stubber.add_client_error('create_role', service_error_code=code,
                                      service_message='Role already exists.',
                                      http_status_code=status, expected_params=expected_params)

    def put_role_policy(self, role_name, policy_name, document):
        self.stubber.add_response('put_role_policy', {},
                                  {'RoleName': role_name, 'PolicyName': policy_name, 'PolicyDocument': document})

    def put_role_policy_error(self, role_name, policy_name, document, code='MalformedPolicyDocument'):
        self.stubber.add_client_error('put_role_policy', service_error_code=code,
                                      service_message='Syntax errors in policy.', http_status_code=400,
                                      expected_params={'RoleName': role_name, 'PolicyName': policy_name,
                                                       'PolicyDocument': document})

    def attach_role_policy(self, role_name, policy_arn):
        self.stubber.add_response('attach_role_policy', {}, {'RoleName': role_name, 'PolicyArn': policy_arn})

    def attach_role_policy_error(self, role_name, policy_arn, code='NoSuchEntity', status=404):
        self.stubber.add_client_error('attach_role_policy', service_error_code=code,
                                      service_message=f'Policy {policy_arn} does not exist.',
                                      http_status_code=status,
                                      expected_params={'RoleName': role_name, 'PolicyArn': policy_arn})

    def _paged(self, method, result_key, role_name, pages):
        # With no pages given, the role has nothing to list.
        pages = pages or ([],)
        for index, items in enumerate(pages):
            response = {result_key: items, 'IsTruncated': index < len(pages) - 1}
            expected = {'RoleName': role_name}
            if index:
                expected['Marker'] = f'marker-{index}'
            if response['IsTruncated']:
                response['Marker'] = f'marker-{index + 1}'
            self.stubber.add_response(method, response, expected)


@pytest.fixture
def iam_client():
    session = Session(aws_access_key_id='testing', aws_secret_access_key='testing',
                      region_name='us-east-1')
    return session.client('iam')


@pytest.fixture
def stubber(iam_client):
    with Stubber(iam_client) as stubber:
        yield stubber


@pytest.fixture
def iam(stubber):
    return IamStubs(stubber)
