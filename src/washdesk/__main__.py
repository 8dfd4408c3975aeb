from washdesk.cli import main

main()
