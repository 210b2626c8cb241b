# libc_support/io_utils.py
import sys


# meta: modules=io callers=*
def stderr(msg):
    sys.stderr.write(msg.rstrip("\n") + "\n")

# meta: modules=io callers=*
def stdout(line):
    sys.stdout.write(line + "\n")
