# ==============================================================================
# app/calculator/overrides.py
# ------------------------------------------------------------------------------
# Manual corrections of ingested branch figures, kept apart from the figures
# themselves and merged in only when a result is calculated.
# ==============================================================================

from dataclasses import replace

# The plan figure always comes from the report.
OVERRIDABLE_FIELDS = ('revenue_rr', 'service_asist_revenue')


class OverrideSet:
    """
    Maps a branch name to a partial record of overridden fields, e.g.
    {'Praha 1': {'service_asist_revenue': 125000}}.
    """

    def __init__(self, entries=None):
        self._entries = {}
        for branch_name, fields in (entries or {}).items():
            for field, value in fields.items():
                self.set(branch_name, field, value)

    def set(self, branch_name, field, value):
        """Stores one overridden field, keeping the branch's other overrides."""
        if field not in OVERRIDABLE_FIELDS:
            raise ValueError(f"Field '{field}' cannot be overridden.")
        self._entries.setdefault(branch_name, {})[field] = value

    def get(self, branch_name):
        return dict(self._entries.get(branch_name, {}))

    def clear(self):
        self._entries.clear()

    def resolve(self, figures):
        """
        Returns a copy of `figures` with this set's values for its branch
        substituted. Fields without an override keep their ingested value.
        """
        entry = self._entries.get(figures.branch_name)
        if not entry:
            return figures
        return replace(figures, **entry)

    def __contains__(self, branch_name):
        return branch_name in self._entries

    def __len__(self):
        return len(self._entries)

    def __repr__(self):
        return f'<OverrideSet {self._entries}>'
