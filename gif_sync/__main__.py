from gif_sync.main import main

main()
