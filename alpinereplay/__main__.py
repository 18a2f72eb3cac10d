from alpinereplay.cli import main

raise SystemExit(main())
