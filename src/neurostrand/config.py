import configparser
import os

from neurostrand.genotype.innovation_tracker import InnovationTracker


class Config:

    def __init__(self, config_file: str | None = None):
        """
        Initialize Config by parsing an INI file, or create a Config holding default values.

        Parameters:
            config_file: Path to the INI configuration file.
                         If None, creates a default Config for manual attribute setting.
        """

        # Defaults, also used for options missing from the configuration file
        self.num_inputs      = 1
        self.num_outputs     = 1
        self.initial_enabled = True

        self.weight_perturb_prob      = 0.8
        self.weight_perturb_amplitude = 0.1
        self.weight_replace_prob      = 0.1

        self.node_add_probability       = 0.03
        self.connection_add_probability = 0.05
        self.connection_add_attempts    = 20

        self.disabled_chance = 0.75

        self.distance_excess_coeff   = 1.0
        self.distance_disjoint_coeff = 1.0
        self.distance_weight_coeff   = 0.4

        self.innovation_policy = "global"

        if config_file is None:
            return

        if not os.path.exists(config_file):
            raise FileNotFoundError(f"Configuration file '{config_file}' not found")

        parser = configparser.ConfigParser()
        parser.read(config_file)

        # Helper function to safely parse values
        def get_value(section, key, value_type, default):
            try:
                if value_type == int:
                    return parser.getint(section, key)
                elif value_type == float:
                    return parser.getfloat(section, key)
                elif value_type == bool:
                    return parser.getboolean(section, key)
                elif value_type == str:
                    return parser.get(section, key).strip()
            except (configparser.NoSectionError, configparser.NoOptionError):
                return default

        # [GENOME]

        # The number of input nodes, through which the network receives inputs.
        self.num_inputs = get_value('GENOME', 'num_inputs', int, self.num_inputs)

        # The number of output nodes, to which the network delivers outputs.
        self.num_outputs = get_value('GENOME', 'num_outputs', int, self.num_outputs)

        # Whether the connection genes of a newly-created genome start enabled.
        self.initial_enabled = get_value('GENOME', 'initial_enabled', bool, self.initial_enabled)

        # [WEIGHT_MUTATION]

        # The probability that mutation will change the 'weight'
        # of a connection by adding a random value.
        self.weight_perturb_prob = get_value('WEIGHT_MUTATION', 'weight_perturb_prob', float,
                                             self.weight_perturb_prob)

        # The maximum absolute value of a 'weight' perturbation.
        self.weight_perturb_amplitude = get_value('WEIGHT_MUTATION', 'weight_perturb_amplitude', float,
                                                  self.weight_perturb_amplitude)

        # The probability that mutation will replace the 'weight' of a connection
        # with a new value drawn uniformly from [0, 1).
        # Checked independently of (and after) the perturbation.
        self.weight_replace_prob = get_value('WEIGHT_MUTATION', 'weight_replace_prob', float,
                                             self.weight_replace_prob)

        # [STRUCTURAL_MUTATIONS]

        # The probability that mutation will add a new node (splitting an existing
        # connection, which is disabled).
        self.node_add_probability = get_value('STRUCTURAL_MUTATIONS', 'node_add_probability', float,
                                              self.node_add_probability)

        # The probability that mutation will add a connection between existing nodes.
        self.connection_add_probability = get_value('STRUCTURAL_MUTATIONS', 'connection_add_probability', float,
                                                    self.connection_add_probability)

        # How many random node pairs are tried before giving up on adding a connection.
        self.connection_add_attempts = get_value('STRUCTURAL_MUTATIONS', 'connection_add_attempts', int,
                                                 self.connection_add_attempts)

        # [CROSSOVER]

        # The chance that an inherited gene is disabled if it is disabled in either parent.
        self.disabled_chance = get_value('CROSSOVER', 'disabled_chance', float, self.disabled_chance)

        # [SPECIATION]

        # The coefficients for the excess and disjoint gene counts'
        # contribution to the compatibility distance.
        self.distance_excess_coeff   = get_value('SPECIATION', 'distance_excess_coeff', float,
                                                 self.distance_excess_coeff)
        self.distance_disjoint_coeff = get_value('SPECIATION', 'distance_disjoint_coeff', float,
                                                 self.distance_disjoint_coeff)

        # The coefficient for the average weight difference of matching genes.
        self.distance_weight_coeff = get_value('SPECIATION', 'distance_weight_coeff', float,
                                               self.distance_weight_coeff)

        # [INNOVATION]

        # Whether identical structural mutations share an innovation number.
        # Allowed values:
        #   "global"     - for the whole run
        #   "generation" - within the same generation
        #   "none"       - never
        self.innovation_policy = get_value('INNOVATION', 'innovation_policy', str, self.innovation_policy)
        if self.innovation_policy not in InnovationTracker.POLICIES:
            raise ValueError(f"Invalid innovation_policy '{self.innovation_policy}'")

    def make_tracker(self) -> InnovationTracker:
        """
        Create an InnovationTracker using the configured deduplication policy.
        """
        return InnovationTracker(self.innovation_policy)
