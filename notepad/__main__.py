from notepad.main import run

run()
