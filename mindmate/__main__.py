from mindmate.ui.cli.app import run

run()
