from hellosite.main import main

main()
