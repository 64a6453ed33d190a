from release_uploader.cli import main

main()
