from typing import List, Literal


Register = Literal['ap', 'fp']
AP: Register = 'ap'
FP: Register = 'fp'
REGISTERS: List[Register] = [AP, FP]


def is_register(name: str) -> bool:
    return name in REGISTERS
