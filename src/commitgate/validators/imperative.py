"""タイトル先頭語の命令形判定に使う語形テーブル。

よく使われるコミット動詞の原形から、三人称単数・過去形・現在分詞を生成し、
語形 → 原形 の対応表を作る。閉じたリストによる簡易判定であり、
リストに無い語は判定しない。
"""

_COMMON_VERBS: tuple[str, ...] = (
    "add",
    "adjust",
    "allow",
    "apply",
    "avoid",
    "bump",
    "change",
    "check",
    "clean",
    "clear",
    "convert",
    "correct",
    "create",
    "delete",
    "deprecate",
    "disable",
    "document",
    "enable",
    "ensure",
    "exclude",
    "extract",
    "fix",
    "handle",
    "implement",
    "improve",
    "include",
    "introduce",
    "mark",
    "merge",
    "move",
    "optimize",
    "prevent",
    "print",
    "refactor",
    "release",
    "remove",
    "rename",
    "replace",
    "restore",
    "revert",
    "simplify",
    "support",
    "switch",
    "track",
    "update",
    "upgrade",
    "use",
    "validate",
)

# 規則変化で生成できない語形（三人称, 過去形, 現在分詞）
_IRREGULAR: dict[str, tuple[str, ...]] = {
    "build": ("builds", "built", "building"),
    "drop": ("drops", "dropped", "dropping"),
    "format": ("formats", "formatted", "formatting"),
    "make": ("makes", "made", "making"),
    "run": ("runs", "ran", "running"),
    "set": ("sets", "setting"),
    "stop": ("stops", "stopped", "stopping"),
    "write": ("writes", "wrote", "written", "writing"),
}

_VOWELS = "aeiou"


def _third_person(verb: str) -> str:
    if verb.endswith(("s", "x", "z", "ch", "sh")):
        return verb + "es"
    if verb.endswith("y") and verb[-2] not in _VOWELS:
        return verb[:-1] + "ies"
    return verb + "s"


def _past(verb: str) -> str:
    if verb.endswith("e"):
        return verb + "d"
    if verb.endswith("y") and verb[-2] not in _VOWELS:
        return verb[:-1] + "ied"
    return verb + "ed"


def _gerund(verb: str) -> str:
    if verb.endswith("e") and not verb.endswith("ee"):
        return verb[:-1] + "ing"
    return verb + "ing"


def _build_table() -> dict[str, str]:
    table: dict[str, str] = {}
    for verb in _COMMON_VERBS:
        for form in (_third_person(verb), _past(verb), _gerund(verb)):
            table[form] = verb
    for verb, forms in _IRREGULAR.items():
        for form in forms:
            table[form] = verb
    return table


NON_IMPERATIVE_FORMS: dict[str, str] = _build_table()


def imperative_form(word: str) -> str | None:
    """非命令形の語であれば対応する原形を、そうでなければNoneを返す。"""
    return NON_IMPERATIVE_FORMS.get(word.lower())
