from abc import ABC, abstractmethod


class VectorCommitmentScheme(ABC):

    def __init__(self, width):
        self.width = width
        self.order = None
        self.name = ""
        self.is_setup = False

    @abstractmethod
    def setup(self):
        raise NotImplementedError()

    @abstractmethod
    def zero_commitment(self):
        raise NotImplementedError()

    @abstractmethod
    def commit(self, vector):
        raise NotImplementedError()

    @abstractmethod
    def update(self, commitment, index, old_value, new_value):
        raise NotImplementedError()
