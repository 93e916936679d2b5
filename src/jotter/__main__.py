from jotter.main import main

main()
