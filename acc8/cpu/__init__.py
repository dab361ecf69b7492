# ACC8 CPU: codec, decoder, registers
