"""
VocaEngine kernel: vocabulary inputs, suggestions, collections and entries.

Models live in voca_engine.models; orchestration and storage in voca_engine.runtime.
"""
