from ffcross.cli import main

raise SystemExit(main())
