# ACC8 memory bank
