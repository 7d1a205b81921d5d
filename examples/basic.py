import io
import logging
import sys

from affindex import AffParser

logging.basicConfig(level=logging.DEBUG)

TEST = (
    "SET UTF-8\n"
    "\n"
    "TRY abcdef \n"
    "\n"
    "SFX A Y 2\n"
    "#comment1\n"
    "SFX A abc qwe .\n"
    "  #comment2\n"
    "  sfx A zxc abc .\n"
    "  COMPLEXPREFIXES  \n"
    "lang hu_HU #this is not comment. It's part of the parameter"
)

if len(sys.argv) > 1:
    parser = AffParser.from_file(sys.argv[1], encoding=sys.argv[2] if len(sys.argv) > 2 else 'Windows-1252')
else:
    parser = AffParser()
    parser.parse(io.StringIO(TEST))

for name, parameters in parser.data().items():
    print(f"{name}: {', '.join(parameters)}")
