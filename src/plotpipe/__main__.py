from .receive import main

main()
