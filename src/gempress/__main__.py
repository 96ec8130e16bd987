from gempress.cli.app import app

app()
