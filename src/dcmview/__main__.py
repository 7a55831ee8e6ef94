from dcmview.cli import app

app(prog_name="dcmview")
