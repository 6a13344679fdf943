from kspwlo.cli import main

main()
