from sentry_api_cli.cli import main

main()
