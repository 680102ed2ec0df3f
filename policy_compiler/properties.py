"""
Klucze statystyk kompilacji (Compilation.properties).
"""

RULE_CONFLICTS      = "rule-conflicts"
RULE_RIGHTS         = "rule-rights"
RULE_OBLIGATIONS    = "rule-obligations"
RULE_PROHIBITIONS   = "rule-prohibitions"
RULE_EX_OBLIGATION  = "rule-exclusions-of-obligation"
RULE_EX_PROHIBITION = "rule-exclusions-of-prohibition"
RULE_EX_RIGHT       = "rule-exclusions-of-right"
EXT_COMPUTED        = "extension-computed"
EXT_SIZE            = "extension-size"

# Prefiksy tally profilu kompilacji
RULE_ACTION = "rule-action-"
RULE_MOD    = "rule-mod-"
RULE_TYPE   = "rule-type-"
RULE_OP     = "rule-op-"
