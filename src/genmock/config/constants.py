"""Names baked into every generated mock."""

# Call-tracking library and the test framework it hooks into
TRACKER_IMPORT_PATH = "github.com/philpearl/ut"
TESTING_IMPORT_PATH = "testing"

# Alias under which the interface's own package is imported when the mock
# lives elsewhere. Chosen to be unlikely to clash with a real package name.
LOCAL_PACKAGE_ALIAS = "utmocklocal"

# Identifiers used inside generated method bodies
PARAMS_VAR = "ut__params"
RESULTS_VAR = "r"
RECEIVER_NAME = "i"

HEADER_LINES = (
    "THIS CODE IS AUTO-GENERATED BY genmock",
    "github.com/philpearl/ut/genmock",
)

GO_SOURCE_SUFFIX = ".go"
