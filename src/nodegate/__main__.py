from nodegate.cli import app

app(prog_name="nodegate")
