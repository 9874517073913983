from flatwiki.main import run

run()
