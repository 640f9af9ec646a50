from duplicate_iam_role.cli import cli

if __name__ == '__main__':
    cli()
