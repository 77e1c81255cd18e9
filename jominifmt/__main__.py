from jominifmt.cli import main

raise SystemExit(main())
