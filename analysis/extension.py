"""
analysis/extension.py — ekstensja polityki: itemizowane interpretacje reguł.

Zakres wartości roli `v`:
  - bez wyjątków (domyślnie): {v} ∪ {Singleton(s) : s bezpośrednia podklasa v.first()}
  - z wyjątkami: rekurencyjnie v \\ (s1, s2, …), każda podklasa rozwijana tak samo

Akcje itemizowane to iloczyn kartezjański zakresów wszystkich ról akcji, bez duplikatów
(klucz: postać tekstowa akcji). extend() materializuje każdą akcję jako nową klasę
`x<licznik>` ≡ skompilowana akcja w kopii wyroczni kompilacji.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from policy_compiler import DOMAIN_ROOT, Compilation, Compiler
from policy_compiler import properties as props
from policy_model import (
    Action,
    Complement,
    ConceptClass,
    Modality,
    Policy,
    Role,
    RoleType,
    RoleValue,
    RoleValueSet,
    Rule,
    SENTINELS,
    Singleton,
    Union,
    make_value,
)
from tbox import NOTHING, Named, TBoxOracle, strict_subclasses

logger = logging.getLogger(__name__)


class Extension(Compilation):
    """
    Kompilacja rozszerzona o itemizacje: id (`x0`, `x1`, …) → akcja.

    Wyrocznia ekstensji jest kopią wyroczni kompilacji źródłowej z dodanymi
    aksjomatami `x<i> ≡ akcja`.
    """

    def __init__(
        self,
        compiler: Compiler,
        policy:   Policy,
        oracle:   TBoxOracle,
        actions:  dict[str, Action],
    ) -> None:
        super().__init__(compiler, policy, oracle)
        self._actions = dict(actions)

    def ids(self) -> list[str]:
        return list(self._actions)

    def action(self, ext_id: str) -> Action | None:
        return self._actions.get(ext_id)

    def items(self) -> list[tuple[str, Action]]:
        return list(self._actions.items())

    def __contains__(self, ext_id: object) -> bool:
        return ext_id in self._actions

    def __len__(self) -> int:
        return len(self._actions)


def _complete_actions() -> list[Action]:
    """Pełna przestrzeń akcji z wartownikami dziedzin."""
    def role(role_type: RoleType, prefix: str) -> Role:
        return Role(role_type, prefix, Singleton(role_type.range_restriction()))

    collect = Action("COLLECT")
    collect.add(role(RoleType.OBJECT, ""))
    collect.add(role(RoleType.SOURCE, "FROM"))
    collect.add(role(RoleType.PURPOSE, "FOR"))

    use = collect.clone()
    use.name = "USE"

    transfer = Action("TRANSFER")
    transfer.add(role(RoleType.OBJECT, ""))
    transfer.add(role(RoleType.SOURCE, "FROM"))
    transfer.add(role(RoleType.TARGET, "TO"))
    transfer.add(role(RoleType.PURPOSE, "FOR"))
    return [collect, use, transfer]


class ExtensionCalculator:
    """
    Oblicza ekstensję skompilowanej polityki.

    - compute_exceptions:         zakresy z dokładnymi wyjątkami (drożej, precyzyjniej)
    - compute_complete_extension: pełna przestrzeń COLLECT / USE / TRANSFER zamiast reguł
    - compute_only_prohibitions:  tylko reguły REFRAINMENT (domyślnie)
    """

    def __init__(
        self,
        compute_exceptions:         bool = False,
        compute_complete_extension: bool = False,
        compute_only_prohibitions:  bool = True,
    ) -> None:
        self.compute_exceptions         = compute_exceptions
        self.compute_complete_extension = compute_complete_extension
        self.compute_only_prohibitions  = compute_only_prohibitions

    # ------------------------------------------------------------------
    # Akcje źródłowe
    # ------------------------------------------------------------------

    def source_actions(self, comp: Compilation) -> list[Action]:
        if self.compute_complete_extension:
            return _complete_actions()

        actions: dict[str, Action] = {}
        for rule in comp.policy.rules:
            if self.compute_only_prohibitions and rule.modality is not Modality.REFRAINMENT:
                continue
            actions.setdefault(str(rule.action), rule.action.clone())
        return [actions[key] for key in sorted(actions)]

    # ------------------------------------------------------------------
    # Itemizacja
    # ------------------------------------------------------------------

    def compute(self, comp: Compilation, actions: list[Action] | None = None) -> list[Action]:
        """Itemizowane akcje posortowane po postaci tekstowej."""
        if actions is None:
            actions = self.source_actions(comp)
        logger.debug(f"Obliczanie ekstensji dla {len(actions)} akcji")

        itemized: dict[str, Action] = {}
        for action in actions:
            ranges = [self._role_range(comp, role) for role in action.roles.values()]
            for item in _product(action, ranges):
                itemized[str(item)] = item

        result = [itemized[key] for key in sorted(itemized)]
        comp.set_property(props.EXT_COMPUTED, "true")
        comp.set_property(props.EXT_SIZE, len(result))
        logger.info(f"Ekstensja: {len(result)} akcji itemizowanych")
        return result

    def extend(self, comp: Compilation) -> Extension:
        return extend(comp, self.compute(comp), 0)

    def _role_range(self, comp: Compilation, role: Role) -> list[Role]:
        values: list[RoleValueSet] = []
        if self.compute_exceptions:
            self._range_with_exceptions(comp, values, role.values)
        else:
            self._range_exceptionless(comp, values, role.values)
        return [Role(role.type, role.prefix, v) for v in values]

    def _range_exceptionless(
        self, comp: Compilation, ranges: list[RoleValueSet], vset: RoleValueSet,
    ) -> None:
        first = vset.first()
        ranges.append(vset)
        for sub in _subclasses(comp, first):
            ranges.append(Singleton(_cast(first.domain, sub)))

    def _range_with_exceptions(
        self, comp: Compilation, ranges: list[RoleValueSet], vset: RoleValueSet,
    ) -> None:
        first = vset.first()
        subs  = _subclasses(comp, first)
        if not subs:
            ranges.append(vset)
            return

        exceptions: RoleValueSet | None = None
        for sub in subs:
            single = Singleton(_cast(first.domain, sub))
            self._range_with_exceptions(comp, ranges, single)
            exceptions = single if exceptions is None else Union(single, exceptions)
        ranges.append(Complement(vset, exceptions))


def _subclasses(comp: Compilation, value: RoleValue) -> list[Named]:
    concept = comp.compiler.compile_value(value)
    return sorted(strict_subclasses(comp.oracle, concept))


def _cast(domain: ConceptClass, cls: Named) -> RoleValue:
    """Klasa z hierarchii → wartość roli (korzeń dziedziny → wartownik)."""
    if cls == DOMAIN_ROOT[domain]:
        return SENTINELS[domain]
    return make_value(domain, cls.fragment)


def _product(action: Action, ranges: list[list[Role]]) -> list[Action]:
    """Iloczyn kartezjański zakresów ról; kolejność ról jak w akcji."""
    if not ranges:
        return [Action(action.name)]

    items = []
    for role in ranges[0]:
        item = Action(action.name)
        item.add(role)
        items.append(item)
    for candidates in ranges[1:]:
        items = [_with(partial, role) for partial in items for role in candidates]
    return items


def _with(action: Action, role: Role) -> Action:
    out = action.clone()
    out.add(role)
    return out


# ---------------------------------------------------------------------------
# Materializacja i zapytania
# ---------------------------------------------------------------------------

def extend(comp: Compilation, actions: Iterable[Action], counter: int = 0) -> Extension:
    """
    Kopiuje wyrocznię kompilacji i dodaje `x<counter+i> ≡ akcja` dla każdej akcji.

    Kopie są niezależne, więc wywołania z rozłącznymi zakresami licznika mogą
    pracować równolegle.
    """
    oracle   = comp.oracle.copy()
    compiler = Compiler.attach(oracle, comp.namespace)
    mapping: dict[str, Action] = {}
    for action in actions:
        ext_id = f"x{counter}"
        oracle.assert_equivalent(compiler.named(ext_id), compiler.compile_action(action))
        mapping[ext_id] = action
        counter += 1

    ext = Extension(compiler, comp.policy, oracle, mapping)
    ext.properties.update(comp.properties)
    ext.set_property(props.EXT_COMPUTED, "true")
    ext.set_property(props.EXT_SIZE, len(mapping))
    return ext


def find_rules(ext: Extension, ids: Iterable[str]) -> dict[str, list[Rule]]:
    """Id itemizacji → reguły polityki bezpośrednio nad nią."""
    out: dict[str, list[Rule]] = {}
    for ext_id in ids:
        supers = ext.oracle.direct_superclasses(ext.compiler.named(ext_id))
        rules  = [r for r in (ext.policy.rule(c.fragment) for c in supers) if r is not None]
        if rules:
            out[ext_id] = sorted(rules, key=lambda r: r.id)
    return out


def find_extension(ext: Extension, rules: Iterable[Rule]) -> dict[str, list[str]]:
    """Id reguły → id itemizacji bezpośrednio pod nią."""
    out: dict[str, list[str]] = {}
    for rule in rules:
        subs = ext.oracle.direct_subclasses(ext.compiler.named(rule.id))
        ids  = sorted(c.fragment for c in subs if c != NOTHING and c.fragment in ext)
        if ids:
            out[rule.id] = ids
    return out
