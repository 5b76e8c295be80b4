from ajimi.cli import app

app(prog_name="ajimi")
