from clair_adapter.cli import app

app()
