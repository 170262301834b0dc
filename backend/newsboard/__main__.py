from newsboard.main import run

run()
