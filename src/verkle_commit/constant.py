from py_ecc.optimized_bls12_381 import curve_order as BLS12_381_SCALAR_FIELD

# Bandersnatch is defined over the scalar field of BLS12-381
BANDERSNATCH_MODULUS = BLS12_381_SCALAR_FIELD
BANDERSNATCH_SCALAR_FIELD = (
    13108968793781547619861935127046491459309155893440570251786403306729687672801
)

# a*x^2 + y^2 = 1 + d*x^2*y^2
BANDERSNATCH_A = -5
BANDERSNATCH_D = (
    45022363124591815672509500913686876175488063829319466900776701791074614335719
)
BANDERSNATCH_COFACTOR = 4

BANDERSNATCH_GENERATOR = (
    18886178867200960497001835917649091219057080094937609519140440539760939937304,
    19188667384257783945677642223292697773471335439753913231509108946878080696678,
)

SCALAR_SIZE = 32
FIELD_ELEMENT_SIZE = 32
POINT_SIZE = 4 * FIELD_ELEMENT_SIZE

# Number of children per verkle node, one generator each
VECTOR_WIDTH = 256

# Seed used to compute the 256 pedersen generators using try-and-increment.
# Every implementation must hardcode the same value to interoperate.
PEDERSEN_SEED = b"eth_verkle_oct_2021"

MAX_DERIVATION_ATTEMPTS = 1 << 16
