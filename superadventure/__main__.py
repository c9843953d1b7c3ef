from superadventure.app import main

main()
