"""
Wyciąganie terminologii polityki jako materiału do budowy mapy usług.
"""

from __future__ import annotations

import pathlib

from policy_model import ConceptClass, Policy, RoleType

_ROLE_DOMAIN: dict[RoleType, str] = {
    RoleType.OBJECT:  "Datum",
    RoleType.SOURCE:  "Actor",
    RoleType.TARGET:  "Actor",
    RoleType.PURPOSE: "Purpose",
}

_TYPE_DOMAIN: dict[ConceptClass, str] = {
    ConceptClass.ACTOR:   "Actor",
    ConceptClass.DATUM:   "Datum",
    ConceptClass.PURPOSE: "Purpose",
}


class ThesaurusExtractor:

    def terms(self, policy: Policy) -> dict[str, list[str]]:
        """Dziedzina (Actor / Datum / Purpose) → posortowane nazwy terminów."""
        found: dict[str, set[str]] = {}
        for rule in policy.rules:
            for role in rule.action.roles.values():
                domain = _ROLE_DOMAIN.get(role.type)
                if domain is None:
                    continue
                found.setdefault(domain, set()).update(str(v) for v in role.values.leaves())
        for axiom in policy.types:
            bucket = found.setdefault(_TYPE_DOMAIN[axiom.type], set())
            bucket.add(axiom.lhs)
            bucket.update(axiom.rhs)
        return {domain: sorted(found[domain]) for domain in sorted(found)}

    def extract(self, policy: Policy) -> str:
        out = []
        for domain, terms in self.terms(policy).items():
            out.append(f"# Terminology for {domain}\n\n")
            out.extend(f"{term}\n" for term in terms)
        return "".join(out)

    def write(self, policy: Policy, path: str | pathlib.Path) -> None:
        pathlib.Path(path).write_text(self.extract(policy), encoding="utf-8")
