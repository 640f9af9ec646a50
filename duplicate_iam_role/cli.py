#!/usr/bin/env python3
#
# Duplicates an IAM role: creates a new role with the same trust policy,
# path, description, session duration, tags and permissions boundary as the
# source role, then copies its inline policies and attaches the same managed
# policies.
#
# Credentials and region come from the usual AWS environment variables and
# shared config files.  Pass --profile to pick a named profile.
#
# Usage examples:
#   duplicate-iam-role --source my-app-role --target my-app-role-copy
#   duplicate-iam-role --source arn:aws:iam::123456789012:role/svc/my-app-role --target my-app-role-copy --dry-run
import json
import logging

import click
from boto3.session import Session
from botocore.exceptions import BotoCoreError

from duplicate_iam_role.clone import clone_role
from duplicate_iam_role.errors import CloneError
from duplicate_iam_role.snapshot import role_name_from_arn


def require_value(ctx, param, value):
    if not value or not value.strip():
        raise click.BadParameter(f'{param.opts[-1]} argument cannot be empty')
    return value.strip()


def print_dry_run(result):
    click.echo(f'Dry run: would create role {result.target_role_name} with:')
    click.echo(json.dumps(result.create_role_request, indent=2))
    click.echo(f'Would copy {len(result.inventory.inline_policies)} inline policies:')
    for policy in result.inventory.inline_policies:
        click.echo(f'  - {policy.name}')
    click.echo(f'Would attach {len(result.inventory.managed_policies)} managed policies:')
    for policy in result.inventory.managed_policies:
        click.echo(f'  - {policy.arn}')


def print_summary(result):
    click.echo(f'Created role: {result.target_role_name}')
    click.echo(f'  - {len(result.copied_inline_policies)} inline policies copied')
    click.echo(f'  - {len(result.attached_managed_policies)} managed policies attached')
    if result.failures:
        click.echo(f'  - {len(result.failures)} policies could not be copied:', err=True)
        for failure in result.failures:
            click.echo(f'      {failure}', err=True)


@click.command()
@click.option('-s', '--source', required=True, callback=require_value,
              help='Name or ARN of the role to copy')
@click.option('-t', '--target', required=True, callback=require_value,
              help='Name of the role to create')
@click.option('--profile', default=None, help='AWS profile name')
@click.option('--region', default=None, help='AWS region name')
@click.option('-d', '--dry-run', is_flag=True, help='Show what would be created without making changes')
@click.option('-v', '--verbose', is_flag=True, help='Log every API step')
def cli(source: str, target: str, profile: str | None, region: str | None, dry_run: bool, verbose: bool):
    """
    Create the TARGET role as a copy of the SOURCE role, with the same trust
    policy, attributes, inline policies and managed policy attachments.

    Failing to copy an individual policy is reported as a warning and does
    not stop the copy; the exit status is still 0.
    """
    logging.basicConfig(level=logging.DEBUG if verbose else logging.INFO,
                        format='%(levelname)s: %(message)s')
    # botocore is very chatty at debug level
    logging.getLogger('botocore').setLevel(logging.WARNING)

    try:
        session = Session(profile_name=profile, region_name=region)
        iam_client = session.client('iam')
    except BotoCoreError as e:
        raise click.ClickException(f'Unable to load AWS config: {e}')

    try:
        result = clone_role(iam_client, role_name_from_arn(source), target, dry_run=dry_run)
    except CloneError as e:
        raise click.ClickException(str(e))

    if result.dry_run:
        print_dry_run(result)
    else:
        print_summary(result)


if __name__ == '__main__':
    cli()
