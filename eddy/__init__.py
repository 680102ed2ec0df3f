"""eddy — polityki prywatności jako reguły modalne: CLI i konfiguracja."""

__version__ = "0.1.0"
