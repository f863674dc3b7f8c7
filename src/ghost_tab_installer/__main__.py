from ghost_tab_installer.launcher import main

main()
