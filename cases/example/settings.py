############                Channel                             ############

diameter = 0.6          # m
roughness = 0.013       # Manning's n
S_0 = 0.001

############                Flow                                ############

discharge = 0.1         # m^3/s
control_depth = 0.3     # m
direction = 'DN'

############                Computation                         ############

spatial_step = 10       # m
n_steps = 5
