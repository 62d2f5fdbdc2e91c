# config package — authoritative source for all calculator configuration.
#
# Sub-modules:
#   report_params.py — significance-level bounds, test constants, display precision
