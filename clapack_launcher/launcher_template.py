#!{{ python }}
#
# Compiler launcher for {{ toolchain_file }}, generated by clapack.py.
#
# Runs the compiler named in clang-for-clapack.path (or $CLAPACK_CLANG)
# with -target set, plus --sysroot and -resource-dir if the
# corresponding files exist next to this launcher.

import sys

if __name__ == "__main__":
    # Directory holding the clapack_launcher package that generated us.
    sys.path.insert(0, {{ package_root }})

    from clapack_launcher.launcher import main

    sys.exit(main())
