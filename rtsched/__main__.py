from rtsched.cli import main

raise SystemExit(main())
