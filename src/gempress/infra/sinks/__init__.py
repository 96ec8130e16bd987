"""Output sinks for a capsule build."""

from gempress.infra.sinks.atom import AtomSink
from gempress.infra.sinks.gemtext import IndexSink, PostSink

__all__ = ["AtomSink", "IndexSink", "PostSink"]
