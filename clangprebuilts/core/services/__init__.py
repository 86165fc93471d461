"""Services — path derivation and property patch builders."""
