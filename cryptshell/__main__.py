from cryptshell.scripts.cryptshell import run

run()
