from docsrouter.cli import app

app(prog_name="docsrouter")
