from stagewise.adapters.textual.app import main

main()
