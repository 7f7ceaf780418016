from konducta.cli.app import app

app()
