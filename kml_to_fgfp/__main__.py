from kml_to_fgfp.cli import main

raise SystemExit(main())
