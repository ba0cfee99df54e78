class MappingException(Exception):
    """
    Base class for exceptions raised by the mapper."""
    pass

class MappingDefinitionException(MappingException):
    """
    Exception raised at construction time for malformed mapping specifications."""
    pass
