"""Analysis components: call-graph result assembly."""
