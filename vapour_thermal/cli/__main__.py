from vapour_thermal.cli.main import main

main()
