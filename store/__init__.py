from .annotations import AnnotationStore

__all__ = ['AnnotationStore']
