from mediafetch.main import run

run()
